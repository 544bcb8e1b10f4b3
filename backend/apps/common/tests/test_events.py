import unittest

from apps.common.events import EventPublisher, entity_deleted, entity_inserted, entity_updated


class Entity:
    pk = 11


class Sender:
    pass


class EventPublisherTests(unittest.TestCase):
    def setUp(self):
        self.received = []
        for signal in (entity_inserted, entity_updated, entity_deleted):
            signal.connect(self.on_event, sender=Sender)
            self.addCleanup(signal.disconnect, self.on_event, sender=Sender)

    def on_event(self, sender, entity, action, **kwargs):
        self.received.append((sender, action, entity.pk))

    def test_publishes_each_action(self):
        publisher = EventPublisher(sender=Sender)
        publisher.entity_inserted(Entity())
        publisher.entity_updated(Entity())
        publisher.entity_deleted(Entity())
        self.assertEqual(
            self.received,
            [(Sender, "inserted", 11), (Sender, "updated", 11), (Sender, "deleted", 11)],
        )

    def test_other_senders_are_not_delivered(self):
        EventPublisher().entity_inserted(Entity())
        self.assertEqual(self.received, [])
