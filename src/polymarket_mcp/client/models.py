"""
Normalized models for upstream Polymarket payloads.

Upstream schemas are not contractually guaranteed, so every field tolerates
absence: numbers coerce to 0.0, text to None, flags to False, and lists to [].
Both the snake_case field names and the camelCase names the live APIs return
are accepted. Normalization happens once, here, before any rendering.
"""

import json
from typing import Annotated, Any, TypeVar

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def to_number(value: Any) -> float:
    """Coerce a value to float, falling back to 0.0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    # NaN compares unequal to itself
    return number if number == number else 0.0


def to_text(value: Any) -> str | None:
    """Coerce a value to a string, keeping missing values as None."""
    if value is None or value == "":
        return None
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def to_flag(value: Any) -> bool:
    """Coerce a value to bool; strings like "false" count as False."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def to_list(value: Any) -> list[Any]:
    """Coerce a value to a list, decoding JSON-encoded arrays."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            decoded = json.loads(value)
        except ValueError:
            return [item.strip() for item in value.split(",") if item.strip()]
        return decoded if isinstance(decoded, list) else [decoded]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def to_market_ref(value: Any) -> Any:
    """Keep nested market objects; drop bare ids and other scalars."""
    return value if isinstance(value, dict) else None


def to_records(value: Any) -> list[Any]:
    """Keep the objects of a nested record list; null becomes an empty list."""
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


def to_object(value: Any) -> dict[str, Any]:
    """Keep a nested object; null and scalars become an empty one."""
    return value if isinstance(value, dict) else {}


Number = Annotated[float, BeforeValidator(to_number)]
Text = Annotated[str | None, BeforeValidator(to_text)]
Flag = Annotated[bool, BeforeValidator(to_flag)]
Items = Annotated[list[Any], BeforeValidator(to_list)]


def _aliases(*names: str) -> Any:
    return Field(default=None, validation_alias=AliasChoices(*names))


class UpstreamModel(BaseModel):
    """Base for all upstream records: ignore unknown fields, default the rest."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MarketRef(UpstreamModel):
    """Nested market summary attached to positions, trades and activity."""

    question: Text = _aliases("question", "title")


MarketInfo = Annotated[MarketRef | None, BeforeValidator(to_market_ref)]


def label_of(item: Any) -> str:
    """Display label for an outcome or tag entry."""
    if isinstance(item, dict):
        return str(item.get("title") or item.get("label") or item.get("name") or item)
    return str(item)


# =============================================================================
# Gamma API
# =============================================================================


class Market(UpstreamModel):
    """A prediction market."""

    id: Text = None
    slug: Text = None
    question: Text = None
    description: Text = None
    active: Flag = False
    closed: Flag = False
    archived: Flag = False
    volume: Number = 0.0
    liquidity: Number = 0.0
    start_date: Text = _aliases("start_date", "startDate")
    end_date: Text = _aliases("end_date", "endDate")
    outcomes: Items = Field(default_factory=list)
    tags: Items = Field(default_factory=list)
    condition_id: Text = _aliases("condition_id", "conditionId")
    enable_order_book: Flag = Field(
        default=False, validation_alias=AliasChoices("enable_order_book", "enableOrderBook")
    )


class EventMarket(UpstreamModel):
    """A market listed inside an event."""

    question: Text = None
    title: Text = None
    volume: Number = 0.0
    outcomes: Items = Field(default_factory=list)


class Event(UpstreamModel):
    """An event grouping related markets."""

    id: Text = None
    slug: Text = None
    title: Text = None
    description: Text = None
    active: Flag = False
    closed: Flag = False
    archived: Flag = False
    volume: Number = 0.0
    liquidity: Number = 0.0
    start_date: Text = _aliases("start_date", "startDate")
    end_date: Text = _aliases("end_date", "endDate")
    tags: Items = Field(default_factory=list)
    markets: Annotated[list[EventMarket], BeforeValidator(to_records)] = Field(
        default_factory=list
    )


# =============================================================================
# Data API
# =============================================================================


class Position(UpstreamModel):
    """A user's holding in one market outcome."""

    market_id: Text = _aliases("market_id", "marketId", "conditionId")
    market: MarketInfo = None
    title: Text = None
    asset: Text = None
    condition_id: Text = _aliases("condition_id", "conditionId")
    size: Number = 0.0
    avg_price: Number = Field(default=0.0, validation_alias=AliasChoices("avg_price", "avgPrice"))
    current_price: Number = Field(
        default=0.0, validation_alias=AliasChoices("current_price", "curPrice", "currentPrice")
    )
    initial_value: Number = Field(
        default=0.0, validation_alias=AliasChoices("initial_value", "initialValue")
    )
    current_value: Number = Field(
        default=0.0, validation_alias=AliasChoices("current_value", "currentValue")
    )
    pnl: Number = Field(default=0.0, validation_alias=AliasChoices("pnl", "cashPnl"))
    pnl_percent: Number = Field(
        default=0.0, validation_alias=AliasChoices("pnl_percent", "percentPnl")
    )
    realized_pnl: Number = Field(
        default=0.0, validation_alias=AliasChoices("realized_pnl", "realizedPnl")
    )
    total_bought: Number = Field(
        default=0.0, validation_alias=AliasChoices("total_bought", "totalBought")
    )
    redeemable: Flag = False
    outcome: Text = None

    @property
    def market_question(self) -> str:
        if self.market and self.market.question:
            return self.market.question
        return self.title or "Unknown Market"


class Activity(UpstreamModel):
    """One on-chain action by a user."""

    id: Text = None
    activity_type: Text = _aliases("activity_type", "type")
    side: Text = None
    timestamp: Any = None
    market_id: Text = _aliases("market_id", "marketId", "conditionId")
    market: MarketInfo = None
    title: Text = None
    asset_id: Text = _aliases("asset_id", "asset")
    outcome: Text = None
    amount: Number = Field(default=0.0, validation_alias=AliasChoices("amount", "size"))
    price: Number = 0.0
    tx_hash: Text = _aliases("tx_hash", "transactionHash")
    block_number: Text = _aliases("block_number", "blockNumber")
    gas_fee: Number = Field(default=0.0, validation_alias=AliasChoices("gas_fee", "gasFee"))

    @property
    def market_question(self) -> str:
        if self.market and self.market.question:
            return self.market.question
        return self.title or "Unknown Market"


class Trade(UpstreamModel):
    """An executed trade."""

    id: Text = None
    timestamp: Any = None
    side: Text = None
    market_id: Text = _aliases("market_id", "marketId", "conditionId")
    market: MarketInfo = None
    title: Text = None
    asset_id: Text = _aliases("asset_id", "asset")
    outcome: Text = None
    size: Number = 0.0
    price: Number = 0.0
    user_address: Text = _aliases("user_address", "proxyWallet")
    tx_hash: Text = _aliases("tx_hash", "transactionHash")
    block_number: Text = _aliases("block_number", "blockNumber")
    maker_address: Text = _aliases("maker_address", "makerAddress")
    taker_address: Text = _aliases("taker_address", "takerAddress")
    fee_rate_bps: Number = Field(
        default=0.0, validation_alias=AliasChoices("fee_rate_bps", "feeRateBps")
    )
    maker_fee: Number = Field(default=0.0, validation_alias=AliasChoices("maker_fee", "makerFee"))
    taker_fee: Number = Field(default=0.0, validation_alias=AliasChoices("taker_fee", "takerFee"))

    @property
    def market_question(self) -> str:
        if self.market and self.market.question:
            return self.market.question
        return self.title or "Unknown Market"

    @property
    def value(self) -> float:
        return self.size * self.price


class Holder(UpstreamModel):
    """A wallet holding shares of a market outcome."""

    address: Text = _aliases("proxy_wallet", "proxyWallet", "address")
    balance: Number = Field(default=0.0, validation_alias=AliasChoices("balance", "amount"))
    bio: Text = None
    alias: Text = _aliases("alias", "name", "pseudonym")
    avatar: Text = _aliases("avatar", "profileImage")
    verified: Flag = False
    token_id: Text = _aliases("asset_id", "token_id", "asset")


class HoldersPage(UpstreamModel):
    """Holders response: the holder list plus optional market info."""

    holders: Annotated[list[Holder], BeforeValidator(to_records)] = Field(
        default_factory=list
    )
    market: Annotated[MarketRef, BeforeValidator(to_object)] = Field(
        default_factory=MarketRef
    )


# =============================================================================
# CLOB API
# =============================================================================


class OrderLevel(UpstreamModel):
    """One price level of an order book."""

    price: Number = 0.0
    size: Number = 0.0

    @property
    def value(self) -> float:
        return self.price * self.size


class OrderBook(UpstreamModel):
    """Bids and asks for one token, best level first."""

    market: Text = None
    asset_id: Text = None
    bids: Annotated[list[OrderLevel], BeforeValidator(to_records)] = Field(
        default_factory=list
    )
    asks: Annotated[list[OrderLevel], BeforeValidator(to_records)] = Field(
        default_factory=list
    )


class PricePoint(UpstreamModel):
    """One point of a price history series."""

    timestamp: Any = Field(default=None, validation_alias=AliasChoices("timestamp", "t"))
    price: Number = Field(default=0.0, validation_alias=AliasChoices("price", "p"))
    volume: Number = Field(default=0.0, validation_alias=AliasChoices("volume", "v"))


# =============================================================================
# Payload-shape helpers
# =============================================================================

ModelT = TypeVar("ModelT", bound=UpstreamModel)

_LIST_KEYS = ("data", "history", "results", "markets", "events")


def _unwrap_list(payload: Any) -> list[Any]:
    if payload is None:
        return []
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _LIST_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
        return []
    raise ValueError(f"Unexpected response payload: {type(payload).__name__}")


def parse_list(model: type[ModelT], payload: Any) -> list[ModelT]:
    """Parse a list payload (bare or wrapped in a common envelope key)."""
    return [model.model_validate(item) for item in _unwrap_list(payload) if isinstance(item, dict)]


def parse_order_book(payload: Any) -> OrderBook:
    """Parse an order book payload, ordering both sides best level first.

    Bids are sorted by price descending and asks ascending, whatever order the
    upstream returned them in. Anything but an object yields an empty book.
    """
    if not isinstance(payload, dict):
        return OrderBook()
    book = OrderBook.model_validate(payload)
    book.bids.sort(key=lambda level: level.price, reverse=True)
    book.asks.sort(key=lambda level: level.price)
    return book


def parse_holders(payload: Any) -> HoldersPage:
    """Parse a holders payload.

    Accepts either {"holders": [...], "market": {...}} or the Data API's list
    of {"token": ..., "holders": [...]} groups, which are flattened in order.
    """
    if isinstance(payload, dict):
        return HoldersPage.model_validate(payload)

    holders: list[Holder] = []
    for group in _unwrap_list(payload):
        if not isinstance(group, dict):
            continue
        if "holders" in group:
            for item in group.get("holders") or []:
                if not isinstance(item, dict):
                    continue
                holder = Holder.model_validate(item)
                if holder.token_id is None and group.get("token") is not None:
                    holder.token_id = str(group["token"])
                holders.append(holder)
        else:
            holders.append(Holder.model_validate(group))
    return HoldersPage(holders=holders)


def parse_price_history(payload: Any) -> list[PricePoint]:
    """Parse a price history payload (bare list or {"history": [...]})."""
    return parse_list(PricePoint, payload)
