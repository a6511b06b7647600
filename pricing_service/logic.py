from . import schemas, config # Use relative import within the package
from .clients import InventoryClient, LedgerClient
from shared.exceptions import ValidationError
import logging
import time
import uuid
from typing import Callable

logger = logging.getLogger(__name__)

NANOS_PER_DAY = 86_400 * 1_000_000_000
ACTOR = "price_engine"

# --- Built-in rules: name -> (description, factor) ---
NEAR_EXPIRATION = "near_expiration"
LOW_STOCK_HIGH_DEMAND = "low_stock_high_demand"

NEAR_EXPIRATION_FACTOR = 0.7
LOW_STOCK_FACTOR = 1.1


def _near_expiration(item: schemas.ItemSnapshot, now: int) -> bool:
    return item.expiration_date <= now + config.NEAR_EXPIRATION_DAYS * NANOS_PER_DAY


def _low_stock_high_demand(item: schemas.ItemSnapshot, now: int) -> bool:
    # No demand signal is tracked; scarce stock is treated as high demand.
    return 0 < item.quantity <= config.LOW_STOCK_THRESHOLD


RULE_LOGIC = {
    NEAR_EXPIRATION: (_near_expiration, NEAR_EXPIRATION_FACTOR),
    LOW_STOCK_HIGH_DEMAND: (_low_stock_high_demand, LOW_STOCK_FACTOR),
}


class RuleBook:
    """Ordered pricing rules. Only rules with built-in logic can exist."""

    def __init__(self, rules: list[schemas.PricingRule]):
        self._rules = {rule.name: rule for rule in rules}

    @classmethod
    def default(cls) -> "RuleBook":
        return cls([
            schemas.PricingRule(
                name=NEAR_EXPIRATION,
                description=f"Reduce price by 30% if item is within {config.NEAR_EXPIRATION_DAYS} days of expiration.",
            ),
            schemas.PricingRule(
                name=LOW_STOCK_HIGH_DEMAND,
                description="Increase price by 10% if demand is high and stock is low.",
            ),
        ])

    def all_rules(self) -> list[schemas.PricingRule]:
        return [rule.model_copy() for rule in self._rules.values()]

    def active(self) -> list[schemas.PricingRule]:
        return [rule for rule in self._rules.values() if rule.active]

    def set_rule(self, name: str, description: str | None, active: bool) -> schemas.PricingRule:
        rule = self._rules.get(name)
        if rule is None:
            raise ValidationError("name", f"unknown pricing rule '{name}'")
        updated = rule.model_copy(update={
            "description": description if description is not None else rule.description,
            "active": active,
        })
        self._rules[name] = updated
        logger.info(f"Pricing rule '{name}' set to active={active}")
        return updated.model_copy()


def apply_rules(item: schemas.ItemSnapshot, rules: list[schemas.PricingRule], now: int) -> tuple[float, list[str]]:
    """
    Applies the given rules in order and returns (new_price, applied rule names).
    """
    new_price = item.price
    applied = []
    for rule in rules:
        condition, factor = RULE_LOGIC[rule.name]
        if condition(item, now):
            new_price *= factor
            applied.append(rule.name)
            logger.debug(f"Item {item.item_id}: rule '{rule.name}' applied, factor {factor}")
    return round(new_price, 2), applied


class PricingEngine:
    """Reads an item from Inventory, prices it, and logs the result to the Ledger."""

    def __init__(
        self,
        inventory: InventoryClient,
        ledger: LedgerClient,
        rules: RuleBook,
        clock: Callable[[], int] = time.time_ns,
    ):
        self.inventory = inventory
        self.ledger = ledger
        self.rules = rules
        self.clock = clock

    async def adjust_price(self, item_id: str) -> schemas.PriceAdjustmentResult:
        logger.info(f"Adjusting price for item '{item_id}'")

        # 1. Fetch current price and expiration; a failure ends the operation
        item = await self.inventory.get_item(item_id)

        # 2. Apply active rules in order
        new_price, applied = apply_rules(item, self.rules.active(), self.clock())

        # 3. Log the adjustment to the ledger
        transaction_id = f"price_adjustment_{item_id}_{uuid.uuid4().hex}"
        rules_text = ", ".join(applied) if applied else "none"
        details = f"Adjusted price of {item_id} from {item.price:.2f} to {new_price:.2f} (rules: {rules_text})"
        await self.ledger.record(transaction_id, "adjust_price", details, ACTOR)

        logger.info(f"Item '{item_id}': price {item.price:.2f} -> {new_price:.2f}, rules: {rules_text}")
        return schemas.PriceAdjustmentResult(
            item_id=item_id,
            old_price=item.price,
            new_price=new_price,
            applied_rules=applied,
            transaction_id=transaction_id,
        )
