from flask import current_app
from flask_jwt_extended import create_access_token, create_refresh_token
from werkzeug.security import check_password_hash, generate_password_hash

from libms.exceptions import AuthenticationError, BusinessRuleError, NotFound
from libms.extensions import transaction
from libms.models.user import ROLE_USER, User
from libms.repositories.token_repo import TokenRepo
from libms.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def register(username: str, email: str, password: str, role: str = ROLE_USER):
        if UserRepo.get_by_username(username) or UserRepo.get_by_email(email):
            raise BusinessRuleError("Username or email is already registered.")

        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            role=role
        )
        UserRepo.create(user)
        return user

    @staticmethod
    def issue_tokens(user: User):
        claims = {"role": user.role, "username": user.username}
        access = create_access_token(identity=str(user.id), additional_claims=claims)
        refresh = create_refresh_token(identity=str(user.id), additional_claims=claims)
        return access, refresh

    @staticmethod
    def login(username: str, password: str):
        user = UserRepo.get_by_username(username)
        if not user or not check_password_hash(user.password_hash, password):
            raise AuthenticationError("Invalid username or password.")

        access, refresh = AuthService.issue_tokens(user)
        return access, refresh, user

    @staticmethod
    def refresh(user_id: str, jti: str):
        """Rotate a refresh token: the presented one is revoked, a new pair is issued."""
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFound("User not found.")

        with transaction():
            if TokenRepo.revoke(jti, "refresh", user.id) is None:
                raise AuthenticationError("Refresh token has already been used.")

        current_app.logger.info(f"[auth] refresh token rotated user={user.id}")
        return AuthService.issue_tokens(user)

    @staticmethod
    def logout(user_id: str, jti: str, token_type: str):
        with transaction():
            TokenRepo.revoke(jti, token_type, user_id)
        current_app.logger.info(f"[auth] logout user={user_id} revoked={token_type}")
