"""Publishing helpers: draft merge and remote cache copy."""

from serieslink.publish.merge import (
    PublishAction,
    PublishItem,
    execute_publish,
    plan_publish,
)
from serieslink.publish.remote import RemoteCopyItem, execute_remote_pull, plan_remote_pull

__all__ = [
    "PublishAction",
    "PublishItem",
    "plan_publish",
    "execute_publish",
    "RemoteCopyItem",
    "plan_remote_pull",
    "execute_remote_pull",
]
