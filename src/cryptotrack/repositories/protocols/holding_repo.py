"""Holding repository protocol."""

from datetime import datetime
from typing import Optional, Protocol

from cryptotrack.domain.models import Holding
from cryptotrack.domain.views import ValuedHolding


class HoldingRepository(Protocol):
    """Interface for per-user holding data access."""

    def list_by_user(self, user_id: str) -> list[Holding]:
        """List a user's holdings, most recent purchase first."""
        ...

    def get(self, user_id: str, holding_id: str) -> Optional[Holding]:
        """Get a holding owned by the user."""
        ...

    def create(self, holding: Holding) -> Holding:
        """Persist a new holding."""
        ...

    def update(self, holding: Holding) -> Holding:
        """Update user-editable fields of an existing holding."""
        ...

    def update_valuation(self, valued: ValuedHolding, updated_at: datetime) -> None:
        """Persist the valuation columns of one holding."""
        ...

    def delete(self, user_id: str, holding_id: str) -> bool:
        """Delete a holding. Returns False when nothing was deleted."""
        ...
