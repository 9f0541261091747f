"""
Routes for the authlib session server.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, Response

from foxauth.common.exceptions import AuthlibError
from foxauth.common.models import JoinRequest, ServerInfoResponse, TokenContext
from foxauth.server.auth import get_token_context
from foxauth.server.services import AuthlibService

logger = logging.getLogger(__name__)

API_LOCATION_HEADER = "X-Authlib-Injector-API-Location"


def base_url(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


class AuthlibRoutes:
    """Handles FastAPI routes for the authlib session server."""

    def __init__(self, service: AuthlibService):
        self.service = service
        self.prefix = service.config.API_PREFIX

    def setup_routes(self, app: FastAPI) -> None:
        """Setup API routes on the FastAPI app."""
        app.get("/health")(self.health)
        app.get(self.prefix)(self.server_info)
        app.get(self.prefix + "/session/minecraft/profile/{uuid}")(self.profile)
        app.get(self.prefix + "/sessionserver/session/minecraft/hasJoined")(
            self.has_joined
        )
        app.post(
            self.prefix + "/sessionserver/session/minecraft/join", status_code=204
        )(self.join)

    @staticmethod
    def _http_error(e: AuthlibError) -> HTTPException:
        if e.status_code >= 500:  # noqa: PLR2004
            logger.error("Internal error: %s", e, exc_info=e)
            return HTTPException(500, "Internal server error")
        return HTTPException(e.status_code, str(e))

    async def health(self) -> dict[str, Any]:
        """Handle /health endpoint."""
        return {"status": "ok", "timestamp": int(time.time())}

    async def server_info(self, request: Request, response: Response) -> ServerInfoResponse:
        """Handle GET /authlib."""
        try:
            info = await self.service.server_info(request.url.hostname or "")
        except AuthlibError as e:
            raise self._http_error(e) from e
        response.headers[API_LOCATION_HEADER] = self.service.api_location(
            request.url.scheme, request.url.netloc
        )
        return info

    async def profile(self, uuid: str, request: Request) -> Any:
        """Handle GET /authlib/session/minecraft/profile/{uuid}."""
        try:
            profile = await self.service.profile(uuid, base_url(request))
        except AuthlibError as e:
            raise self._http_error(e) from e
        return profile.model_dump(exclude_none=True)

    async def has_joined(
        self,
        request: Request,
        username: str | None = None,
        serverId: str | None = None,  # noqa: N803
        selectedProfile: str | None = None,  # noqa: N803
        ip: str | None = None,
    ) -> Any:
        """Handle GET /authlib/sessionserver/session/minecraft/hasJoined."""
        try:
            profile = await self.service.has_joined(
                username,
                base_url(request),
                server_id=serverId,
                selected_profile=selectedProfile,
                ip=ip,
            )
        except AuthlibError as e:
            raise self._http_error(e) from e
        if profile is None:
            return Response(status_code=204)
        return profile.model_dump(exclude_none=True)

    async def join(
        self,
        req: JoinRequest,
        context: TokenContext = Depends(get_token_context),  # noqa: B008
    ) -> Response:
        """Handle POST /authlib/sessionserver/session/minecraft/join."""
        try:
            await self.service.join(req, context)
        except AuthlibError as e:
            raise self._http_error(e) from e
        return Response(status_code=204)
