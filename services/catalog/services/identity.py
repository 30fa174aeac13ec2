"""
Where: services/catalog/services/identity.py
What: Client for the identity (SSO) service.
Why: Bearer tokens are validated and resolved to user ids remotely.
"""

from ..pb import par_pro_pb2, par_pro_pb2_grpc
from .remote import RemoteServiceClient


class IdentityClient(RemoteServiceClient):
    stub_class = par_pro_pb2_grpc.SSOStub

    async def validate_token(self, token: str) -> bool:
        res = await self._invoke(
            "sso.ValidateToken.adapter", "ValidateToken", par_pro_pb2.StringSSOMsg(string=token)
        )
        return res.bool

    async def resolve_token(self, token: str) -> str:
        """Return the user id the token belongs to (may be empty)."""
        res = await self._invoke(
            "sso.GetUserByToken.adapter", "GetUserByToken", par_pro_pb2.StringSSOMsg(string=token)
        )
        return res.id

    async def parse_claims(self, token: str) -> str:
        """
        Resolve the token's claims to the caller id in a single call.

        The result is returned as sent; an empty or malformed id is rejected
        by the auth dependency. Rejected tokens surface as grpc.aio.AioRpcError.
        """
        res = await self._invoke(
            "sso.ParseClaims.adapter", "ParseClaims", par_pro_pb2.StringSSOMsg(string=token)
        )
        return res.token
