import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Role',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(help_text='角色名称，例如 admin / member', max_length=50, unique=True)),
                ('description', models.CharField(blank=True, default='', help_text='角色描述', max_length=255)),
            ],
            options={
                'db_table': 'role',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(blank=True, default='', help_text='显示名称', max_length=255)),
                ('email', models.EmailField(max_length=255, unique=True)),
                ('is_active', models.BooleanField(db_index=True, default=False, help_text='是否激活')),
            ],
            options={
                'db_table': 'user',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='UserRole',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('role', models.ForeignKey(help_text='角色', on_delete=django.db.models.deletion.CASCADE, related_name='user_links', to='workspace_hub.role')),
                ('user', models.ForeignKey(help_text='用户', on_delete=django.db.models.deletion.CASCADE, related_name='role_links', to='workspace_hub.user')),
            ],
            options={
                'db_table': 'user_role',
                'constraints': [models.UniqueConstraint(fields=('user', 'role'), name='uniq_user_role')],
            },
        ),
        migrations.AddField(
            model_name='user',
            name='roles',
            field=models.ManyToManyField(blank=True, related_name='users', through='workspace_hub.UserRole', to='workspace_hub.role'),
        ),
        migrations.CreateModel(
            name='Workspace',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('name', models.CharField(help_text='工作空间名称', max_length=255)),
                ('created_by', models.ForeignKey(help_text='工作空间创建者 (所有者)', on_delete=django.db.models.deletion.CASCADE, related_name='created_workspaces', to='workspace_hub.user')),
            ],
            options={
                'db_table': 'workspace',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='WorkspaceMember',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('joined_at', models.DateTimeField(auto_now_add=True, help_text='加入时间')),
                ('user', models.ForeignKey(help_text='成员用户', on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='workspace_hub.user')),
                ('workspace', models.ForeignKey(help_text='工作空间', on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='workspace_hub.workspace')),
            ],
            options={
                'db_table': 'workspace_member',
                'constraints': [models.UniqueConstraint(fields=('workspace', 'user'), name='uniq_workspace_member')],
            },
        ),
        migrations.AddField(
            model_name='workspace',
            name='members',
            field=models.ManyToManyField(blank=True, help_text='工作空间成员 (不包含创建者)', related_name='workspaces', through='workspace_hub.WorkspaceMember', to='workspace_hub.user'),
        ),
        migrations.CreateModel(
            name='Token',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('jti', models.CharField(help_text='当前刷新令牌ID', max_length=64, unique=True)),
                ('expires_at', models.DateTimeField(help_text='刷新令牌过期时间')),
                ('revoked_at', models.DateTimeField(blank=True, help_text='吊销时间', null=True)),
                ('user', models.OneToOneField(help_text='所属用户', on_delete=django.db.models.deletion.CASCADE, related_name='token', to='workspace_hub.user')),
            ],
            options={
                'db_table': 'token',
                'ordering': ['id'],
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(db_index=True, help_text='操作类型', max_length=100)),
                ('resource_type', models.CharField(blank=True, help_text='资源类型', max_length=50, null=True)),
                ('resource_id', models.BigIntegerField(blank=True, help_text='资源ID', null=True)),
                ('ip_address', models.GenericIPAddressField(blank=True, help_text='IP地址', null=True)),
                ('user_agent', models.TextField(blank=True, default='', help_text='User Agent')),
                ('metadata', models.JSONField(default=dict, help_text='附加元数据')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('user', models.ForeignKey(blank=True, help_text='操作用户', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='audit_logs', to='workspace_hub.user')),
            ],
            options={
                'db_table': 'audit_log',
                'ordering': ['-created_at', '-id'],
                'indexes': [models.Index(fields=['resource_type', 'resource_id'], name='audit_log_resource_idx')],
            },
        ),
    ]
