from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping, Optional

from .exceptions import MalformedActionError, MissingTargetError, UnknownActionError

if TYPE_CHECKING:
    from .registry import ContractRegistry


class ActionTag(str, Enum):
    """
    Frozen action taxonomy of the contract lock.

    Using str Enum keeps serialization stable and lets members compare equal
    to the raw tags found in spec files.
    """

    NAVIGATE = "navigate"
    EXTERNAL_LINK = "external_link"
    SHOW_INFORMATION = "show_information"
    INPUT = "input"
    SUBMIT = "submit"
    SEARCH = "search"
    TOGGLE = "toggle"
    DOWNLOAD = "download"
    PHONE_CALL = "phone_call"
    SMS = "sms"
    EMAIL = "email"


REQUIRED_TARGET_TAGS = frozenset(
    {
        ActionTag.SHOW_INFORMATION,
        ActionTag.NAVIGATE,
        ActionTag.EXTERNAL_LINK,
    }
)

# Node-level keys that may hold the target when the action is a bare string.
_TARGET_KEYS = ("target", "action_target", "href")


@dataclass(frozen=True)
class Action:
    """A parsed, contract-checked action.

    Instances only exist for tags accepted by the contract; a required-target
    tag always carries a non-empty target.
    """

    tag: str
    target: Optional[str] = None


def _node_target(node: Mapping[str, Any]) -> Any:
    for key in _TARGET_KEYS:
        if node.get(key) is not None:
            return node.get(key)
    return None


def raw_action_fields(node: Mapping[str, Any]) -> Optional[tuple[Any, Any]]:
    """Return the raw (tag, target) pair carried by a node, or None.

    No checks are applied; renderers use this to list what the source says
    even when the action is rejected by the contract.
    """

    raw = node.get("action")
    if raw is None or raw == "":
        return None
    if isinstance(raw, Mapping):
        tag = raw.get("type", raw.get("tag"))
        target = raw.get("target") if "target" in raw else _node_target(node)
        return tag, target
    return raw, _node_target(node)


def parse_action(node: Mapping[str, Any], contract: "ContractRegistry") -> Optional[Action]:
    """Parse the action carried by a spec node against a contract.

    Returns None when the node carries no action.

    Raises:
    - MalformedActionError: the action value has an unusable shape.
    - UnknownActionError: the tag is outside the contract's taxonomy.
    - MissingTargetError: a required-target tag has an empty target.
    """

    fields = raw_action_fields(node)
    if fields is None:
        return None
    tag, target = fields

    if not isinstance(tag, str) or not tag.strip():
        raise MalformedActionError(f"action has no usable tag: {tag!r}")
    if target is not None and not isinstance(target, str):
        raise MalformedActionError(f"{tag} target must be a string", tag=tag)

    if not contract.is_allowed_action(tag):
        raise UnknownActionError(f"action '{tag}' is not in the allowed taxonomy", tag=tag)
    if contract.requires_target(tag) and (target is None or not target.strip()):
        raise MissingTargetError(f"{tag} requires non-empty target", tag=tag)

    return Action(tag=tag, target=target)
