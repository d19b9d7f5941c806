"""Unit tests for sign-up, login, refresh and logout use cases."""

from datetime import timedelta

from dishka import AsyncContainer
import pytest

from jwtauth.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    LogoutRequest,
    LogoutUseCase,
    RefreshTokenRequest,
    RefreshTokenUseCase,
    SignUpRequest,
    SignUpUseCase,
)
from jwtauth.domain.error import (
    DuplicateEmailError,
    DuplicateNicknameError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidEmailFormatError,
    InvalidNicknameLengthError,
    InvalidPasswordFormatError,
    InvalidTokenError,
    UserNotFoundError,
)
from jwtauth.domain.model import User
from jwtauth.domain.repository import SessionStore, UserRepository
from jwtauth.domain.service import JWTService, UserService
from jwtauth.domain.value import AuthProvider
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

ALICE = SignUpRequest(email="a@b.com", password="pass1234", nickname="alice")


async def sign_up(env: AsyncContainer, request: SignUpRequest = ALICE):
    use_case = await env.get(SignUpUseCase)
    return await use_case.execute(request)


async def log_in(env: AsyncContainer, email="a@b.com", password="pass1234"):
    use_case = await env.get(LoginUseCase)
    return await use_case.execute(LoginRequest(email=email, password=password))


async def refresh(env: AsyncContainer, refresh_token: str):
    use_case = await env.get(RefreshTokenUseCase)
    return await use_case.execute(RefreshTokenRequest(refresh_token=refresh_token))


class TestSignUp:
    """Tests for SignUpUseCase."""

    @pytest.mark.asyncio
    async def test_creates_local_user(self, unit_env: AsyncContainer):
        """Sign-up should create one user with a hashed local identity."""
        # Act
        response = await sign_up(unit_env)

        # Assert
        assert response.user_id is not None
        assert response.email == "a@b.com"
        assert response.nickname == "alice"
        assert response.providers == [AuthProvider.LOCAL]

        user_repo = await unit_env.get(UserRepository)
        user = await user_repo.find_by_email_with_identities("a@b.com")
        local = user.local_identity()
        assert local.password_hash is not None
        assert local.password_hash != "pass1234"
        assert local.provider_id is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, unit_env):
        await sign_up(unit_env)

        with pytest.raises(DuplicateEmailError):
            await sign_up(
                unit_env,
                SignUpRequest(email="a@b.com", password="pass1234", nickname="other"),
            )

    @pytest.mark.asyncio
    async def test_duplicate_nickname(self, unit_env):
        await sign_up(unit_env)

        with pytest.raises(DuplicateNicknameError):
            await sign_up(
                unit_env,
                SignUpRequest(email="c@d.com", password="pass1234", nickname="alice"),
            )

    @pytest.mark.asyncio
    async def test_email_is_checked_before_nickname(self, unit_env):
        """Both clashing should report the email."""
        await sign_up(unit_env)

        with pytest.raises(DuplicateEmailError):
            await sign_up(unit_env)

    @pytest.mark.asyncio
    async def test_short_password_after_duplicate_checks(self, unit_env):
        """Password policy is checked after uniqueness."""
        await sign_up(unit_env)

        with pytest.raises(DuplicateEmailError):
            await sign_up(
                unit_env,
                SignUpRequest(email="a@b.com", password="short", nickname="bob"),
            )
        with pytest.raises(InvalidPasswordFormatError):
            await sign_up(
                unit_env,
                SignUpRequest(email="c@d.com", password="short", nickname="bob"),
            )

    @pytest.mark.asyncio
    async def test_password_too_long(self, unit_env):
        with pytest.raises(InvalidPasswordFormatError):
            await sign_up(
                unit_env,
                SignUpRequest(email="c@d.com", password="p" * 65, nickname="bob"),
            )

    @pytest.mark.asyncio
    async def test_invalid_email(self, unit_env):
        with pytest.raises(InvalidEmailFormatError):
            await sign_up(
                unit_env,
                SignUpRequest(
                    email="not-an-email", password="pass1234", nickname="bob"
                ),
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("nickname", ["a", "n" * 21])
    async def test_invalid_nickname_length(self, unit_env, nickname):
        with pytest.raises(InvalidNicknameLengthError):
            await sign_up(
                unit_env,
                SignUpRequest(email="c@d.com", password="pass1234", nickname=nickname),
            )


class TestLogin:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_returns_token_pair_and_stores_session(self, unit_env):
        await sign_up(unit_env)

        response = await log_in(unit_env)

        assert response.token_type == "Bearer"
        assert response.expires_in == 30 * 60
        session_store = await unit_env.get(SessionStore)
        session = await session_store.get("a@b.com")
        assert session.token == response.refresh_token

    @pytest.mark.asyncio
    async def test_access_token_carries_user(self, unit_env):
        created = await sign_up(unit_env)

        response = await log_in(unit_env)

        jwt_service = await unit_env.get(JWTService)
        principal = jwt_service.authenticate(response.access_token)
        assert principal.user_id == created.user_id
        assert principal.email == "a@b.com"
        assert principal.nickname == "alice"

    @pytest.mark.asyncio
    async def test_wrong_password(self, unit_env):
        await sign_up(unit_env)

        with pytest.raises(InvalidCredentialsError):
            await log_in(unit_env, password="wrong-pass")

    @pytest.mark.asyncio
    async def test_unknown_email_is_indistinguishable(self, unit_env):
        with pytest.raises(InvalidCredentialsError) as unknown:
            await log_in(unit_env, email="nobody@b.com")

        await sign_up(unit_env)
        with pytest.raises(InvalidCredentialsError) as wrong:
            await log_in(unit_env, password="wrong-pass")

        assert unknown.value.message == wrong.value.message

    @pytest.mark.asyncio
    async def test_federated_only_user_cannot_use_password(self, unit_env):
        """A user without a local identity fails like a wrong password."""
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(
            User.create_federated("n@x.com", "nina", AuthProvider.NAVER, "77")
        )

        with pytest.raises(InvalidCredentialsError):
            await log_in(unit_env, email="n@x.com")


class TestRefresh:
    """Tests for RefreshTokenUseCase."""

    @pytest.mark.asyncio
    async def test_rotates_refresh_token(self, unit_env):
        await sign_up(unit_env)
        first = await log_in(unit_env)

        second = await refresh(unit_env, first.refresh_token)

        assert second.refresh_token != first.refresh_token
        assert second.access_token != first.access_token
        session_store = await unit_env.get(SessionStore)
        session = await session_store.get("a@b.com")
        assert session.token == second.refresh_token

    @pytest.mark.asyncio
    async def test_replayed_token_is_rejected(self, unit_env):
        """The pre-rotation token must stop working."""
        await sign_up(unit_env)
        first = await log_in(unit_env)
        second = await refresh(unit_env, first.refresh_token)

        with pytest.raises(InvalidTokenError):
            await refresh(unit_env, first.refresh_token)

        # The current token still works
        third = await refresh(unit_env, second.refresh_token)
        assert third.refresh_token != second.refresh_token

    @pytest.mark.asyncio
    async def test_second_login_revokes_first_refresh_token(self, unit_env):
        await sign_up(unit_env)
        first = await log_in(unit_env)
        await log_in(unit_env)

        with pytest.raises(InvalidTokenError):
            await refresh(unit_env, first.refresh_token)

    @pytest.mark.asyncio
    async def test_forged_token(self, unit_env):
        with pytest.raises(InvalidTokenError):
            await refresh(unit_env, "forged.token.value")

    @pytest.mark.asyncio
    async def test_expired_token(self, unit_env):
        await sign_up(unit_env)
        jwt_service = await unit_env.get(JWTService)
        expired = jwt_service.issue_refresh_token(
            "a@b.com", ttl=timedelta(seconds=-1)
        )

        with pytest.raises(ExpiredTokenError):
            await refresh(unit_env, expired)

    @pytest.mark.asyncio
    async def test_valid_token_without_session(self, unit_env):
        """A correctly signed token with no stored session is rejected."""
        await sign_up(unit_env)
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(InvalidTokenError):
            await refresh(unit_env, jwt_service.issue_refresh_token("a@b.com"))

    @pytest.mark.asyncio
    async def test_deleted_user(self, unit_env):
        created = await sign_up(unit_env)
        tokens = await log_in(unit_env)
        user_service = await unit_env.get(UserService)
        await user_service.delete(created.user_id)

        with pytest.raises(UserNotFoundError):
            await refresh(unit_env, tokens.refresh_token)


class TestLogout:
    """Tests for LogoutUseCase."""

    @pytest.mark.asyncio
    async def test_logout_ends_refresh_session(self, unit_env):
        await sign_up(unit_env)
        tokens = await log_in(unit_env)
        logout = await unit_env.get(LogoutUseCase)

        response = await logout.execute(LogoutRequest(email="a@b.com"))

        assert response.success is True
        with pytest.raises(InvalidTokenError):
            await refresh(unit_env, tokens.refresh_token)

    @pytest.mark.asyncio
    async def test_logout_without_session_succeeds(self, unit_env):
        logout = await unit_env.get(LogoutUseCase)

        response = await logout.execute(LogoutRequest(email="nobody@b.com"))

        assert response.success is True

    @pytest.mark.asyncio
    async def test_access_token_outlives_logout(self, unit_env):
        """Logout revokes refresh only; the access token stays valid."""
        await sign_up(unit_env)
        tokens = await log_in(unit_env)
        logout = await unit_env.get(LogoutUseCase)
        await logout.execute(LogoutRequest(email="a@b.com"))

        get_current_user = await unit_env.get(GetCurrentUserUseCase)
        me = await get_current_user.execute(
            GetCurrentUserRequest(token=tokens.access_token)
        )

        assert me.email == "a@b.com"
