from flask import current_app

from libms.repositories.token_repo import TokenRepo
from libms.utils.errors import json_error


def register_jwt_callbacks(jwt):
    @jwt.token_in_blocklist_loader
    def _is_revoked(jwt_header, jwt_payload: dict) -> bool:
        return TokenRepo.is_revoked(jwt_payload["jti"])

    @jwt.revoked_token_loader
    def _revoked(jwt_header, jwt_payload: dict):
        current_app.logger.info(f"[auth] revoked {jwt_payload.get('type')} token used sub={jwt_payload.get('sub')}")
        return json_error("token_revoked", "Token has been revoked.", 401)
