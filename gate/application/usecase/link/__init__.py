"""Link use cases."""

from gate.application.usecase.link.change_link_status import (
    ChangeLinkStatusRequest,
    ChangeLinkStatusUseCase,
    LinkAction,
)
from gate.application.usecase.link.common import LinkView, TransitionResponse
from gate.application.usecase.link.delete_link import (
    DeleteLinkRequest,
    DeleteLinkUseCase,
)
from gate.application.usecase.link.expire_links import (
    ExpireLinksRequest,
    ExpireLinksResponse,
    ExpireLinksUseCase,
)
from gate.application.usecase.link.get_link import GetLinkRequest, GetLinkUseCase
from gate.application.usecase.link.issue_link import (
    IssueLinkRequest,
    IssueLinkUseCase,
)

__all__ = [
    "ChangeLinkStatusRequest",
    "ChangeLinkStatusUseCase",
    "DeleteLinkRequest",
    "DeleteLinkUseCase",
    "ExpireLinksRequest",
    "ExpireLinksResponse",
    "ExpireLinksUseCase",
    "GetLinkRequest",
    "GetLinkUseCase",
    "IssueLinkRequest",
    "IssueLinkUseCase",
    "LinkAction",
    "LinkView",
    "TransitionResponse",
]
