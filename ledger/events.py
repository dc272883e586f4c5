from datetime import datetime
from typing import Callable, Dict, Iterable, List, NamedTuple

from ledger.budgets import remaining
from ledger.domain import BudgetProgress, BudgetState, to_amount
from ledger.formatting import budget_label, format_amount, period_label
from ledger.logging_setup import get_logger

__all__ = ['event_bus', 'EXPENSE_ADDED', 'BUDGET_ALERT', 'Event', 'EventBus', 'publish_budget_alerts']

logger = get_logger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name, [])
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        logger.debug("publishing %s to %d handlers", name, len(handlers))
        return [handler(event, payload) for handler in handlers]

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


EXPENSE_ADDED = "EXPENSE_ADDED"
BUDGET_ALERT = "BUDGET_ALERT"

event_bus = EventBus()


def expense_added_handler(event: Event, payload: dict) -> dict:
    return {"amount": to_amount(payload.get("amount"))}


def budget_alert_handler(event: Event, payload: dict) -> dict:
    p: BudgetProgress = payload["progress"]
    if p.state is BudgetState.OK:
        return {}

    b = p.budget
    where = f"{budget_label(b)} · {period_label(b)}"
    if p.state is BudgetState.OVER:
        message = (
            f"{where}: over budget, {format_amount(p.spent)} / {format_amount(b.amount)} "
            f"({format_amount(-remaining(p))} over)"
        )
    else:
        message = f"{where}: near limit, {format_amount(p.spent)} / {format_amount(b.amount)}"

    return {
        "alert": message,
        "budget_id": b.id,
        "state": p.state,
        "spent": p.spent,
        "limit": to_amount(b.amount),
    }


def publish_budget_alerts(
    progresses: Iterable[BudgetProgress], bus: EventBus = event_bus
) -> List[dict]:
    """Publish BUDGET_ALERT for every budget that is near or over its limit."""
    results: List[dict] = []
    for p in progresses:
        if p.state is BudgetState.OK:
            continue
        results.extend(bus.publish(BUDGET_ALERT, {"progress": p}))
    return results


def register_default_handlers(bus: EventBus = event_bus) -> None:
    bus.subscribe(EXPENSE_ADDED, expense_added_handler)
    bus.subscribe(BUDGET_ALERT, budget_alert_handler)


register_default_handlers()
