"""
Adapter base — the contract between goat's services and external tools.

Services never spawn processes themselves. They build an Action, hand it
to an adapter and inspect the Receipt. Swapping the adapter (see
MockAdapter) is how tests run the whole pipeline without touching the
host's package manager.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from goat.core.models.action import Action, Receipt


class ExecutionContext(BaseModel):
    """Everything an adapter needs to execute an action."""

    action: Action
    params: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_action(cls, action: Action) -> ExecutionContext:
        return cls(action=action, params=action.params)


class Adapter(ABC):
    """Abstract base class for all adapters.

    Adapters perform external side effects and return receipts.
    They NEVER raise exceptions — failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def validate(self, context: ExecutionContext) -> tuple[bool, str]:
        """Validate that the action can be executed.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: ExecutionContext) -> Receipt:
        """Execute the action and return a receipt.

        MUST never raise exceptions. All failures are captured
        in the Receipt with status='failed'.
        """

    def run(self, action: Action) -> Receipt:
        """Validate then execute an action."""
        context = ExecutionContext.for_action(action)
        is_valid, error_msg = self.validate(context)
        if not is_valid:
            return Receipt.failure(
                adapter=self.name,
                action_id=action.id,
                error=f"Validation failed: {error_msg}",
                command=str(action.params.get("command", "")),
            )
        return self.execute(context)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
