from sqlalchemy import select

from libms.extensions import db
from libms.models.revoked_token import RevokedToken


class TokenRepo:
    @staticmethod
    def is_revoked(jti: str) -> bool:
        stmt = select(RevokedToken.id).where(RevokedToken.jti == jti)
        return db.session.execute(stmt).first() is not None

    @staticmethod
    def revoke(jti: str, token_type: str, user_id=None):
        if TokenRepo.is_revoked(jti):
            return None
        token = RevokedToken(jti=jti, token_type=token_type, user_id=user_id)
        db.session.add(token)
        return token
