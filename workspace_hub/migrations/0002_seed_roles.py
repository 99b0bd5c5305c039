from django.db import migrations


def seed_roles(apps, schema_editor):
    """写入固定角色"""
    from workspace_hub.constants import DEFAULT_ROLES, ROLE_DESCRIPTIONS

    Role = apps.get_model('workspace_hub', 'Role')
    for name in DEFAULT_ROLES:
        Role.objects.get_or_create(
            name=name,
            defaults={'description': ROLE_DESCRIPTIONS.get(name, '')}
        )


class Migration(migrations.Migration):

    dependencies = [
        ('workspace_hub', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(seed_roles, migrations.RunPython.noop),
    ]
