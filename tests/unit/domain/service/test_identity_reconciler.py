"""Unit tests for IdentityReconciler."""

import pytest

from jwtauth.domain.error import (
    IdentityAlreadyLinkedError,
    InvalidEmailFormatError,
    InvalidTokenError,
)
from jwtauth.domain.model import User
from jwtauth.domain.service import IdentityReconciler
from jwtauth.domain.service.identity_reconciler import derive_nickname
from jwtauth.domain.value import AuthProvider, CanonicalIdentity
from jwtauth.persistence.repository.inmemory import InMemoryUserRepository


def naver(provider_id: str = "77", email: str | None = "n@x.com", name="Nina"):
    return CanonicalIdentity(
        provider=AuthProvider.NAVER, provider_id=provider_id, email=email, name=name
    )


def kakao(provider_id: str = "k-1", email: str | None = "n@x.com", name="Kim"):
    return CanonicalIdentity(
        provider=AuthProvider.KAKAO, provider_id=provider_id, email=email, name=name
    )


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def reconciler(user_repo) -> IdentityReconciler:
    return IdentityReconciler(user_repo)


class TestReconcile:
    """Tests for IdentityReconciler.reconcile()."""

    @pytest.mark.asyncio
    async def test_creates_new_user(self, reconciler, user_repo):
        """First login should create a user with one federated identity."""
        user = await reconciler.reconcile(naver())

        assert user.id is not None
        assert user.email == "n@x.com"
        assert user.nickname == "Nina"
        assert [i.provider for i in user.identities] == [AuthProvider.NAVER]
        assert user.identities[0].provider_id == "77"
        assert user.identities[0].password_hash is None

    @pytest.mark.asyncio
    async def test_same_identity_twice_is_idempotent(self, reconciler, user_repo):
        """Repeat login should return the same user without new identities."""
        first = await reconciler.reconcile(naver())
        second = await reconciler.reconcile(naver())

        assert second.id == first.id
        assert len(second.identities) == 1
        assert len(user_repo._users) == 1

    @pytest.mark.asyncio
    async def test_two_providers_fold_into_one_user(self, reconciler, user_repo):
        """Same email across providers should link onto one user."""
        first = await reconciler.reconcile(naver())
        second = await reconciler.reconcile(kakao())

        assert second.id == first.id
        assert {i.provider for i in second.identities} == {
            AuthProvider.NAVER,
            AuthProvider.KAKAO,
        }
        assert len(user_repo._users) == 1

    @pytest.mark.asyncio
    async def test_fold_is_order_independent(self, user_repo):
        """Either login order should end with one user and both identities."""
        reconciler = IdentityReconciler(user_repo)

        await reconciler.reconcile(kakao())
        user = await reconciler.reconcile(naver())

        assert len(user_repo._users) == 1
        assert {i.provider for i in user.identities} == {
            AuthProvider.NAVER,
            AuthProvider.KAKAO,
        }

    @pytest.mark.asyncio
    async def test_links_to_local_user(self, reconciler, user_repo):
        """A password user should gain the federated identity and keep the local one."""
        local = await user_repo.save(User.create_local("n@x.com", "nina", "digest"))

        user = await reconciler.reconcile(naver())

        assert user.id == local.id
        assert user.local_identity() is not None
        assert user.identity_for(AuthProvider.NAVER) is not None

    @pytest.mark.asyncio
    async def test_repeat_login_updates_nickname(self, reconciler):
        """The latest provider name should replace the nickname."""
        await reconciler.reconcile(naver(name="Nina"))

        user = await reconciler.reconcile(naver(name="Nina Park"))

        assert user.nickname == "Nina Park"

    @pytest.mark.asyncio
    async def test_too_short_name_keeps_nickname(self, reconciler):
        """A one-character name should leave the nickname unchanged."""
        await reconciler.reconcile(naver(name="Nina"))

        user = await reconciler.reconcile(naver(name="N"))

        assert user.nickname == "Nina"

    @pytest.mark.asyncio
    async def test_different_subject_same_provider_conflicts(self, reconciler):
        """Second subject of one provider on the same email is a conflict."""
        await reconciler.reconcile(naver(provider_id="77"))

        with pytest.raises(IdentityAlreadyLinkedError):
            await reconciler.reconcile(naver(provider_id="88"))

    @pytest.mark.asyncio
    async def test_missing_subject_is_invalid(self, reconciler):
        with pytest.raises(InvalidTokenError):
            await reconciler.reconcile(naver(provider_id=None))

    @pytest.mark.asyncio
    async def test_new_user_without_email_is_rejected(self, reconciler, user_repo):
        """A new user needs a valid email."""
        with pytest.raises(InvalidEmailFormatError):
            await reconciler.reconcile(naver(email=None))

        assert user_repo._users == {}


class TestDeriveNickname:
    """Tests for derive_nickname()."""

    def test_prefers_name(self):
        assert derive_nickname(naver(name="Nina")) == "Nina"

    def test_falls_back_to_email_local_part(self):
        assert derive_nickname(naver(name=None, email="nina.park@x.com")) == "nina.park"

    def test_falls_back_to_provider_and_subject(self):
        assert derive_nickname(naver(name="N", email=None)) == "naver_77"

    def test_truncates_long_names(self):
        assert derive_nickname(naver(name="N" * 30)) == "N" * 20
