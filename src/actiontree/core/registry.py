"""Action Registry: maps a node's type tag to the builder for that action."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping

from pydantic import BaseModel, Field, ValidationError

from actiontree.core.actions.base import Action
from actiontree.core.errors import ActionTreeError, MalformedNodeError, UnknownActionTypeError

ActionBuilder = Callable[[Dict[str, Any], "ActionRegistry"], Action]


class ActionRegistry(BaseModel):
    """Registry of action builders keyed by wire type tag."""

    builders: Dict[str, Callable[..., Action]] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}

    def register(self, type_tag: str, builder: ActionBuilder) -> None:
        """
        Register a builder for a type tag.

        Registering a tag again replaces the earlier builder.

        Args:
            type_tag: The "type" value in the JSON node (e.g., "send_sms")
            builder: Called with the raw node and this registry; builds child
                nodes through ``registry.create``
        """
        self.builders[type_tag] = builder

    def create(self, node: Any) -> Action:
        """
        Build a runtime Action from a wire node, children first.

        Raises:
            MalformedNodeError: If the node is missing, has no 'type', or lacks
                fields its type requires
            UnknownActionTypeError: If no builder is registered for the type
        """
        if not isinstance(node, Mapping):
            raise MalformedNodeError("Invalid node: expected an object with a 'type' property")
        type_tag = node.get("type")
        if not type_tag:
            raise MalformedNodeError("Invalid node: missing 'type' property")
        if not isinstance(type_tag, str):
            raise MalformedNodeError(f"Invalid node: 'type' must be a string, got {type(type_tag).__name__}")

        builder = self.builders.get(type_tag)
        if builder is None:
            raise UnknownActionTypeError(type_tag, self.builders.keys())

        try:
            return builder(dict(node), self)
        except ActionTreeError:
            raise
        except ValidationError as exc:
            raise MalformedNodeError("Invalid node", node_type=type_tag, cause=exc) from exc
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedNodeError("Invalid node", node_type=type_tag, cause=exc) from exc

    def is_registered(self, type_tag: str) -> bool:
        return type_tag in self.builders

    def list_registered_types(self) -> list[str]:
        """Return all registered type tags, sorted."""
        return sorted(self.builders.keys())


def register_builtin_actions(registry: ActionRegistry) -> ActionRegistry:
    """Install the shipped action types (send_sms, send_email, condition, loop, sequence)."""
    from actiontree.core.actions.specs import BUILTIN_BUILDERS

    for type_tag, builder in BUILTIN_BUILDERS.items():
        registry.register(type_tag, builder)
    return registry


# Global singleton instance, populated on first use
_global_action_registry = ActionRegistry()
_builtins_installed = False


def get_action_registry() -> ActionRegistry:
    """Get the global action registry, installing the built-in types once."""
    global _builtins_installed
    if not _builtins_installed:
        register_builtin_actions(_global_action_registry)
        _builtins_installed = True
    return _global_action_registry


def register_action(type_tag: str, builder: ActionBuilder) -> None:
    """Convenience function to register an action type on the global registry."""
    get_action_registry().register(type_tag, builder)


__all__ = [
    "ActionBuilder",
    "ActionRegistry",
    "get_action_registry",
    "register_action",
    "register_builtin_actions",
]
