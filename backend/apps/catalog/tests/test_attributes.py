import types
import unittest

from apps.catalog.attributes import (
    CheckoutAttributeParser,
    GiftCardInfo,
    ProductAttributeParser,
    dump_blob,
    first_text_length,
    load_blob,
)
from apps.catalog.models import AttributeControlType, ProductAttributeMapping


class StubMapping:
    is_non_combinable = ProductAttributeMapping.is_non_combinable
    should_have_values = ProductAttributeMapping.should_have_values

    def __init__(self, mapping_id, control=AttributeControlType.DROPDOWN, condition_attributes=""):
        self.id = mapping_id
        self.attribute_control_type = control
        self.condition_attributes = condition_attributes


class FakeAttributeService:
    def __init__(self, mappings=(), values=(), combinations=()):
        self.mappings = {m.id: m for m in mappings}
        self.values = {v.id: v for v in values}
        self.combinations = list(combinations)

    def get_mapping_by_id(self, mapping_id):
        return self.mappings.get(mapping_id)

    def get_value_by_id(self, value_id):
        return self.values.get(value_id)

    def get_combinations(self, product_id):
        return [c for c in self.combinations if c.product_id == product_id]


class FakeCheckoutAttributes:
    def __init__(self, attributes):
        self._attributes = {a.id: a for a in attributes}

    def get(self, **filters):
        return self._attributes.get(filters.get("id"))


def blob(*selections, gift_card=None):
    data = {"attributes": [{"id": i, "values": [str(v) for v in vs]} for i, vs in selections]}
    if gift_card:
        data["gift_card"] = gift_card
    return dump_blob(data)


class BlobTests(unittest.TestCase):
    def test_load_and_dump(self):
        self.assertEqual(load_blob(""), {})
        self.assertEqual(load_blob("{not json"), {})
        self.assertEqual(load_blob("[1, 2]"), {})
        self.assertEqual(load_blob({"attributes": []}), {"attributes": []})
        self.assertEqual(dump_blob({"attributes": []}), "")

    def test_first_text_length(self):
        self.assertEqual(first_text_length([]), 0)
        self.assertEqual(first_text_length(["", "abc"]), 0)
        self.assertEqual(first_text_length(["abcd", "x"]), 4)


class ProductAttributeParserTests(unittest.TestCase):
    def setUp(self):
        self.colour = StubMapping(1)
        self.note = StubMapping(2, AttributeControlType.TEXTBOX)
        self.size = StubMapping(3, condition_attributes=blob((1, [10])))
        self.red = types.SimpleNamespace(id=10, product_attribute_mapping_id=1)
        self.large = types.SimpleNamespace(id=30, product_attribute_mapping_id=3)
        self.service = FakeAttributeService(
            [self.colour, self.note, self.size], [self.red, self.large]
        )
        self.parser = ProductAttributeParser(self.service)

    def test_parse_ids_and_values(self):
        raw = blob((1, [10]), (2, ["hello"]), (1, [11]))
        self.assertEqual(self.parser.parse_ids(raw), [1, 2])
        self.assertEqual(self.parser.parse_values(raw, 1), ["10", "11"])
        self.assertEqual(self.parser.parse_values(raw, 5), [])

    def test_add_and_remove_attribute(self):
        raw = self.parser.add_attribute("", 1, 10)
        raw = self.parser.add_attribute(raw, 1, 11)
        raw = self.parser.add_attribute(raw, 2, "note")
        self.assertEqual(self.parser.parse_values(raw, 1), ["10", "11"])
        raw = self.parser.remove_attribute(raw, 1)
        self.assertEqual(self.parser.parse_ids(raw), [2])
        self.assertEqual(self.parser.remove_attribute(raw, 2), "")

    def test_parse_values_only_for_selectable_controls(self):
        raw = blob((1, [10]), (2, ["10"]), (3, [10]))
        self.assertEqual(self.parser.parse_product_attribute_values(raw), [self.red])
        self.assertEqual(self.parser.parse_product_attribute_values(raw, 1), [self.red])

    def test_condition(self):
        self.assertIsNone(self.parser.is_condition_met(self.colour, blob((1, [10]))))
        self.assertTrue(self.parser.is_condition_met(self.size, blob((1, [10]))))
        self.assertFalse(self.parser.is_condition_met(self.size, blob((1, [10, 11]))))
        self.assertFalse(self.parser.is_condition_met(self.size, ""))
        orphan = StubMapping(4, condition_attributes=blob((99, [1])))
        self.assertIsNone(self.parser.is_condition_met(orphan, ""))

    def test_equality_is_order_insensitive(self):
        first = blob((1, [10, 11]), (2, ["Hi"]))
        second = blob((2, ["Hi"]), (1, [11, 10]))
        self.assertTrue(self.parser.are_attributes_equal(first, second))
        self.assertFalse(self.parser.are_attributes_equal(first, blob((1, [10, 11]))))
        self.assertTrue(
            self.parser.are_attributes_equal(
                first, blob((1, [10, 11])), ignore_non_combinable=True
            )
        )

    def test_find_combination(self):
        combination = types.SimpleNamespace(product_id=5, attributes=blob((1, [10])))
        self.service.combinations.append(combination)
        product = types.SimpleNamespace(id=5)
        self.assertIs(
            self.parser.find_combination(product, blob((1, [10]), (2, ["engraved"]))),
            combination,
        )
        self.assertIsNone(self.parser.find_combination(product, blob((1, [11]))))

    def test_gift_card_round_trip_keeps_attributes(self):
        raw = self.parser.set_gift_card(
            blob((1, [10])), GiftCardInfo(recipient_name="Ann", sender_name="Bob")
        )
        info = self.parser.get_gift_card(raw)
        self.assertEqual(info.recipient_name, "Ann")
        self.assertEqual(info.recipient_email, "")
        self.assertEqual(self.parser.parse_ids(raw), [1])
        self.assertEqual(self.parser.get_gift_card(""), GiftCardInfo())


class CheckoutAttributeParserTests(unittest.TestCase):
    def setUp(self):
        self.gift_wrap = types.SimpleNamespace(
            id=1, shippable_product_required=True, condition_attributes=""
        )
        self.comment = types.SimpleNamespace(
            id=2, shippable_product_required=False, condition_attributes=blob((1, ["yes"]))
        )
        self.parser = CheckoutAttributeParser(FakeCheckoutAttributes([self.gift_wrap, self.comment]))

    def test_parse_checkout_attributes(self):
        raw = blob((1, ["yes"]), (7, ["x"]), (2, ["hi"]))
        self.assertEqual(
            self.parser.parse_checkout_attributes(raw), [self.gift_wrap, self.comment]
        )

    def test_condition(self):
        self.assertTrue(self.parser.is_condition_met(self.comment, blob((1, ["yes"]))))
        self.assertFalse(self.parser.is_condition_met(self.comment, blob((1, ["no"]))))

    def test_ensure_only_active_attributes(self):
        raw = blob((1, ["yes"]), (2, ["hi"]), (7, ["gone"]))
        self.assertEqual(self.parser.ensure_only_active_attributes(raw, True), blob((1, ["yes"]), (2, ["hi"])))
        self.assertEqual(self.parser.ensure_only_active_attributes(raw, False), blob((2, ["hi"])))
        self.assertEqual(self.parser.ensure_only_active_attributes("", False), "")
