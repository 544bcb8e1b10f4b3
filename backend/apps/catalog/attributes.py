"""Parsing and comparison of serialized attribute selections.

Selections are stored on cart items, combinations and conditions as a JSON
blob::

    {"attributes": [{"id": 12, "values": ["31", "32"]}],
     "gift_card": {"recipient_name": "...", "sender_name": "..."}}

For selectable controls the values are attribute value ids (as strings); for
text controls they are the entered text.
"""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from apps.common import get_logger

logger = get_logger(__name__).bind(component="catalog", layer="attributes")


@dataclass
class GiftCardInfo:
    recipient_name: str = ""
    recipient_email: str = ""
    sender_name: str = ""
    sender_email: str = ""
    message: str = ""


def load_blob(raw: Any) -> Dict[str, Any]:
    if not raw:
        return {}
    if isinstance(raw, dict):
        return raw
    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        logger.warning("Unreadable attribute blob", raw=str(raw)[:200])
        return {}
    return data if isinstance(data, dict) else {}


def dump_blob(data: Dict[str, Any]) -> str:
    if not data or (not data.get("attributes") and not data.get("gift_card")):
        return ""
    return json.dumps(data, sort_keys=True)


def _entries(raw: Any) -> List[Dict[str, Any]]:
    entries = load_blob(raw).get("attributes") or []
    return [e for e in entries if isinstance(e, dict)]


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (ValueError, TypeError):
        return None


class AttributeBlobParser:
    """Operations that only need the blob itself."""

    def parse_ids(self, raw: Any) -> List[int]:
        ids: List[int] = []
        for entry in _entries(raw):
            attribute_id = _as_int(entry.get("id"))
            if attribute_id is not None and attribute_id not in ids:
                ids.append(attribute_id)
        return ids

    def parse_values(self, raw: Any, attribute_id: int) -> List[str]:
        values: List[str] = []
        for entry in _entries(raw):
            if _as_int(entry.get("id")) != attribute_id:
                continue
            for value in entry.get("values") or []:
                values.append("" if value is None else str(value))
        return values

    def add_attribute(self, raw: Any, attribute_id: int, value: Any) -> str:
        data = dict(load_blob(raw))
        entries = [dict(e) for e in data.get("attributes") or []]
        for entry in entries:
            if _as_int(entry.get("id")) == attribute_id:
                entry["values"] = list(entry.get("values") or []) + [str(value)]
                break
        else:
            entries.append({"id": attribute_id, "values": [str(value)]})
        data["attributes"] = entries
        return dump_blob(data)

    def remove_attribute(self, raw: Any, attribute_id: int) -> str:
        data = dict(load_blob(raw))
        data["attributes"] = [
            e for e in _entries(raw) if _as_int(e.get("id")) != attribute_id
        ]
        return dump_blob(data)

    def _selected_value_sets(self, raw: Any) -> Dict[int, Set[str]]:
        selected: Dict[int, Set[str]] = {}
        for attribute_id in self.parse_ids(raw):
            selected[attribute_id] = {
                v.strip() for v in self.parse_values(raw, attribute_id)
            }
        return selected

    def _condition_met(
        self,
        condition_raw: Any,
        selected_raw: Any,
        load_controlling: Callable[[int], Any],
    ) -> Optional[bool]:
        """
        None when there is no usable condition; otherwise whether the controlling
        attribute carries exactly the enabling values.
        """
        condition_ids = self.parse_ids(condition_raw)
        if not condition_ids:
            return None
        controlling_id = condition_ids[0]
        controlling = load_controlling(controlling_id)
        if controlling is None:
            return None
        expected = {v.strip() for v in self.parse_values(condition_raw, controlling_id)}
        selected = {v.strip() for v in self.parse_values(selected_raw, controlling_id)}
        if not expected:
            return not selected
        return expected == selected


class ProductAttributeParser(AttributeBlobParser):
    def __init__(self, attribute_service):
        self.attribute_service = attribute_service

    def parse_product_attribute_mappings(self, raw: Any) -> List[Any]:
        mappings = []
        for attribute_id in self.parse_ids(raw):
            mapping = self.attribute_service.get_mapping_by_id(attribute_id)
            if mapping is not None:
                mappings.append(mapping)
        return mappings

    def parse_product_attribute_values(
        self, raw: Any, mapping_id: Optional[int] = None
    ) -> List[Any]:
        values = []
        for mapping in self.parse_product_attribute_mappings(raw):
            if mapping_id is not None and mapping.id != mapping_id:
                continue
            if not mapping.should_have_values():
                continue
            for value_str in self.parse_values(raw, mapping.id):
                value_id = _as_int(value_str)
                if value_id is None:
                    continue
                value = self.attribute_service.get_value_by_id(value_id)
                if value is not None and value.product_attribute_mapping_id == mapping.id:
                    values.append(value)
        return values

    def is_condition_met(self, mapping: Any, selected_raw: Any) -> Optional[bool]:
        if mapping is None:
            raise ValueError("mapping is required")
        return self._condition_met(
            getattr(mapping, "condition_attributes", ""),
            selected_raw,
            self.attribute_service.get_mapping_by_id,
        )

    def are_attributes_equal(
        self,
        first: Any,
        second: Any,
        ignore_non_combinable: bool = False,
    ) -> bool:
        """Order-insensitive comparison of two selections (gift card fields are not compared)."""
        left = self._comparable(first, ignore_non_combinable)
        right = self._comparable(second, ignore_non_combinable)
        return left == right

    def _comparable(self, raw: Any, ignore_non_combinable: bool) -> Dict[int, Set[str]]:
        selected = self._selected_value_sets(raw)
        if not ignore_non_combinable:
            return selected
        result = {}
        for attribute_id, values in selected.items():
            mapping = self.attribute_service.get_mapping_by_id(attribute_id)
            if mapping is not None and mapping.is_non_combinable():
                continue
            result[attribute_id] = values
        return result

    def find_combination(self, product: Any, raw: Any) -> Optional[Any]:
        if product is None:
            raise ValueError("product is required")
        for combination in self.attribute_service.get_combinations(product.id):
            if self.are_attributes_equal(
                combination.attributes, raw, ignore_non_combinable=True
            ):
                return combination
        return None

    def get_gift_card(self, raw: Any) -> GiftCardInfo:
        data = load_blob(raw).get("gift_card") or {}
        if not isinstance(data, dict):
            return GiftCardInfo()
        return GiftCardInfo(
            **{
                key: str(data.get(key) or "")
                for key in GiftCardInfo.__dataclass_fields__
            }
        )

    def set_gift_card(self, raw: Any, info: GiftCardInfo) -> str:
        data = dict(load_blob(raw))
        data["gift_card"] = asdict(info)
        return dump_blob(data)


class CheckoutAttributeParser(AttributeBlobParser):
    def __init__(self, checkout_attributes):
        self.checkout_attributes = checkout_attributes

    def parse_checkout_attributes(self, raw: Any) -> List[Any]:
        attributes = []
        for attribute_id in self.parse_ids(raw):
            attribute = self.checkout_attributes.get(id=attribute_id)
            if attribute is not None:
                attributes.append(attribute)
        return attributes

    def is_condition_met(self, attribute: Any, selected_raw: Any) -> Optional[bool]:
        if attribute is None:
            raise ValueError("attribute is required")
        return self._condition_met(
            getattr(attribute, "condition_attributes", ""),
            selected_raw,
            lambda attribute_id: self.checkout_attributes.get(id=attribute_id),
        )

    def ensure_only_active_attributes(self, raw: Any, requires_shipping: bool) -> str:
        """Drop selections that no longer apply, e.g. shipping-only attributes once nothing ships."""
        if not raw:
            return ""
        result = raw
        for attribute_id in self.parse_ids(raw):
            attribute = self.checkout_attributes.get(id=attribute_id)
            if attribute is None or (
                attribute.shippable_product_required and not requires_shipping
            ):
                result = self.remove_attribute(result, attribute_id)
        return result


def first_text_length(values: Iterable[str]) -> int:
    """Length of the first entered text, or 0 when nothing was entered."""
    for value in values:
        return len(value) if value else 0
    return 0
