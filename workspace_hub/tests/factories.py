"""
测试数据工厂
"""

import factory
from factory.django import DjangoModelFactory, Password

from ..models import Role, User, Workspace, WorkspaceMember


DEFAULT_PASSWORD = 'password123'


class RoleFactory(DjangoModelFactory):
    class Meta:
        model = Role
        django_get_or_create = ('name',)

    name = 'member'


class UserFactory(DjangoModelFactory):
    class Meta:
        model = User
        django_get_or_create = ('email',)
        skip_postgeneration_save = True

    name = factory.Faker('name')
    email = factory.Sequence(lambda n: f'user{n}@example.com')
    password = Password(DEFAULT_PASSWORD)
    is_active = True

    @factory.post_generation
    def roles(self, create, extracted, **kwargs):
        """UserFactory(roles=['admin'])"""
        if not create or not extracted:
            return
        for role_name in extracted:
            self.roles.add(RoleFactory(name=role_name))


class WorkspaceFactory(DjangoModelFactory):
    class Meta:
        model = Workspace
        skip_postgeneration_save = True

    name = factory.Faker('company')
    created_by = factory.SubFactory(UserFactory)

    @factory.post_generation
    def members(self, create, extracted, **kwargs):
        """WorkspaceFactory(members=[user1, user2])"""
        if not create or not extracted:
            return
        for user in extracted:
            WorkspaceMember.objects.create(workspace=self, user=user)
