from image_server.backend.app.domain.files.interfaces import Requester


class AllowAllPolicy:
    """
    Grants every request.
    Swap it in core.deps.get_authorization_policy once real auth exists.
    """

    async def authorize(self, *, requester: Requester, filename: str) -> bool:
        return True
