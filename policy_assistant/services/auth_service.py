"""Clerk session token verification."""

from dataclasses import dataclass
from typing import Any, Optional
import jwt
from jwt import PyJWKClient

from policy_assistant.exceptions import InvalidTokenError, MissingTokenError
from policy_assistant.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Claims of a verified Clerk session."""

    clerk_id: str
    session_id: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


def extract_bearer_token(authorization_header: Optional[str]) -> str:
    """Return the token of a ``Bearer <token>`` header."""
    if not authorization_header:
        raise MissingTokenError()

    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise InvalidTokenError("Invalid authorization header format")
    return parts[1]


class AuthService:
    """Verifies Clerk session JWTs against the instance's JWKS."""

    JWKS_URL_TEMPLATE = "https://{clerk_domain}/.well-known/jwks.json"

    def __init__(
        self,
        clerk_domain: str,
        authorized_parties: Optional[list[str]] = None,
    ) -> None:
        self._clerk_domain = clerk_domain
        self._authorized_parties = authorized_parties or []
        self._jwks_client: Optional[PyJWKClient] = None

    @property
    def issuer(self) -> str:
        return f"https://{self._clerk_domain}"

    def _get_jwks_client(self) -> PyJWKClient:
        if self._jwks_client is None:
            jwks_url = self.JWKS_URL_TEMPLATE.format(clerk_domain=self._clerk_domain)
            self._jwks_client = PyJWKClient(jwks_url, cache_keys=True)
        return self._jwks_client

    def _check_issuer(self, token: str) -> None:
        unverified = jwt.decode(token, options={"verify_signature": False})
        issuer = unverified.get("iss", "")
        if not issuer or not issuer.startswith("https://"):
            raise InvalidTokenError("Invalid token issuer")
        if issuer != self.issuer:
            raise InvalidTokenError("Token issuer not trusted")

    def _user_from_claims(self, payload: dict[str, Any]) -> AuthenticatedUser:
        clerk_id = payload.get("sub")
        if not clerk_id:
            raise InvalidTokenError("Token missing user identifier")

        # azp is the origin that requested the token; only enforced when configured
        azp = payload.get("azp")
        if self._authorized_parties and azp and azp not in self._authorized_parties:
            raise InvalidTokenError("Token authorized party not allowed")

        return AuthenticatedUser(
            clerk_id=clerk_id,
            session_id=payload.get("sid"),
            email=payload.get("email"),
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            profile_image_url=payload.get("image_url") or payload.get("profile_image_url"),
        )

    async def verify_token(self, authorization_header: Optional[str]) -> AuthenticatedUser:
        """
        Verify a Clerk session JWT and extract the user claims.

        Args:
            authorization_header: The Authorization header value (Bearer <token>)

        Returns:
            AuthenticatedUser built from the token claims

        Raises:
            MissingTokenError: If no token is provided
            InvalidTokenError: If the token is malformed, untrusted or expired
        """
        token = extract_bearer_token(authorization_header)

        try:
            self._check_issuer(token)
            signing_key = self._get_jwks_client().get_signing_key_from_jwt(token)
            payload = jwt.decode(
                token,
                signing_key.key,
                algorithms=["RS256"],
                issuer=self.issuer,
                options={
                    "verify_exp": True,
                    "verify_iat": True,
                    "verify_nbf": True,
                },
            )
            user = self._user_from_claims(payload)
        except jwt.ExpiredSignatureError:
            log.warning("token expired")
            raise InvalidTokenError("Token has expired")
        except InvalidTokenError:
            raise
        except jwt.InvalidTokenError as e:
            log.warning("token invalid", error=str(e))
            raise InvalidTokenError(f"Token validation failed: {str(e)}")
        except Exception as e:
            log.error("token verification failed", error=str(e), error_type=type(e).__name__)
            raise InvalidTokenError("Token verification failed")

        log.debug("token verified", clerk_id=user.clerk_id, session_id=user.session_id)
        return user


# Singleton instance
_auth_service: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get singleton auth service instance."""
    global _auth_service
    if _auth_service is None:
        from policy_assistant.config import get_settings

        settings = get_settings()
        origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
        _auth_service = AuthService(
            clerk_domain=settings.clerk_domain,
            authorized_parties=origins,
        )
    return _auth_service
