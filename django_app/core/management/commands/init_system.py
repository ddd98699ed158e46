"""
Initialize the system with the settings row, the super admin user and
optionally a first company
"""
from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import transaction

from companies.models import Company, CompanyDomain
from core.models import AppSettings, Profile, User


class Command(BaseCommand):
    help = 'Initialize system with app settings, super admin user and a first company'

    def add_arguments(self, parser):
        parser.add_argument(
            '--allow-signups', action='store_true',
            help='Enable public sign-ups in the app settings row',
        )
        parser.add_argument(
            '--company', default='',
            help='Name of a company to create for the --domain hostname',
        )
        parser.add_argument(
            '--domain', default='',
            help='Hostname to register (verified, primary) for --company',
        )

    def handle(self, *args, **options):
        self.stdout.write('Initializing system...')

        with transaction.atomic():
            self.create_app_settings(options['allow_signups'])
            self.create_super_admin()
            if options['company'] and options['domain']:
                self.create_company(options['company'], options['domain'])

        self.stdout.write(self.style.SUCCESS('System initialized successfully!'))

    def create_app_settings(self, allow_signups):
        app_settings, created = AppSettings.objects.get_or_create(pk=1)
        if allow_signups and not app_settings.allow_signups:
            app_settings.allow_signups = True
            app_settings.save(update_fields=['allow_signups', 'updated_at'])
        status = 'Created' if created else 'Found'
        self.stdout.write(f'  {status} app settings (allow_signups={app_settings.allow_signups})')

    def create_super_admin(self):
        """Create the super admin user from environment settings"""
        email = getattr(settings, 'SUPER_ADMIN_EMAIL', None)
        password = getattr(settings, 'SUPER_ADMIN_PASSWORD', None)

        if not email or not password:
            self.stdout.write(self.style.WARNING(
                '  Skipping super admin creation: SUPER_ADMIN_EMAIL or SUPER_ADMIN_PASSWORD not set'
            ))
            return

        user, created = User.objects.get_or_create(
            email=email.lower(),
            defaults={'is_staff': True, 'is_superuser': True},
        )
        if created:
            user.set_password(password)
            user.save()
            self.stdout.write(f'  Created super admin user: {email}')
        else:
            self.stdout.write(f'  Super admin user already exists: {email}')

        Profile.objects.update_or_create(
            user=user,
            defaults={'role': Profile.ROLE_SUPER_ADMIN, 'status': Profile.STATUS_ACTIVE},
        )

    def create_company(self, name, domain):
        company, created = Company.objects.get_or_create(name=name)
        CompanyDomain.objects.update_or_create(
            domain=domain.lower(),
            defaults={'company': company, 'is_primary': True, 'is_verified': True},
        )
        status = 'Created' if created else 'Found'
        self.stdout.write(f'  {status} company {company.name} on {domain}')
