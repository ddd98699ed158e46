"""
Listings URLs
"""
from django.urls import path
from . import views

app_name = 'listings'

urlpatterns = [
    path('', views.home, name='home'),
    path('resultados/', views.results, name='results'),

    # Property pages
    path('imovel/<slug:slug>/', views.property_detail, name='detail'),
    path('imovel/id/<uuid:property_id>/', views.property_detail_by_id, name='detail_by_id'),
    path('imovel/id/<uuid:property_id>/contato/', views.property_contact, name='contact'),

    # Owner management
    path('anunciar/', views.property_create, name='create'),
    path('meus-imoveis/', views.my_listings, name='my_listings'),
    path('meus-imoveis/<uuid:property_id>/editar/', views.property_edit, name='edit'),
    path('meus-imoveis/<uuid:property_id>/excluir/', views.property_delete, name='delete'),

    # Images
    path('meus-imoveis/<uuid:property_id>/imagens/', views.image_upload, name='image_upload'),
    path('meus-imoveis/<uuid:property_id>/imagens/ordem/', views.image_reorder, name='image_reorder'),
    path('meus-imoveis/<uuid:property_id>/imagens/<uuid:image_id>/remover/', views.image_remove, name='image_remove'),
]
