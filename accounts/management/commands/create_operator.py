from django.core.management.base import BaseCommand, CommandError
from accounts.models import User


class Command(BaseCommand):
    help = "Create or update a console operator (admin or door scanner)"

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('name')
        parser.add_argument('password')
        parser.add_argument(
            '--type', dest='user_type', default='scanner',
            choices=[member.name.lower() for member in User.USER_TYPE],
        )

    def handle(self, *args, **options):
        if len(options['password']) < 8:
            raise CommandError("Password must be at least 8 characters")

        user_type = User.USER_TYPE[options['user_type'].upper()]
        user, created = User.objects.get_or_create(
            email=options['email'],
            defaults={'name': options['name'], 'user_type': user_type},
        )
        user.name = options['name']
        user.user_type = user_type
        user.set_password(options['password'])
        user.save()

        verb = "Created" if created else "Updated"
        self.stdout.write(self.style.SUCCESS(f"{verb} {user_type.name.lower()} {user.email}"))
