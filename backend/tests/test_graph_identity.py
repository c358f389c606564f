"""Unit tests for event identity keys and label normalization."""

import unittest

from mailgraph.graph.identity import EVENT_KEY_SEPARATOR, event_identity, node_label_for, normalize_relationship_type
from mailgraph.models.event import Event


class EventIdentityTests(unittest.TestCase):
    def test_identity_joins_name_date_and_location(self) -> None:
        self.assertEqual(event_identity("Meeting", "2025-01-01", "NY"), "Meeting-2025-01-01-NY")

    def test_missing_fields_use_placeholder(self) -> None:
        self.assertEqual(event_identity("Hearing"), "Hearing-unknown-unknown")
        self.assertEqual(event_identity("Hearing", None, "Courthouse"), "Hearing-unknown-Courthouse")
        self.assertEqual(event_identity("Hearing", "", None), "Hearing-unknown-unknown")

    def test_any_field_change_changes_identity(self) -> None:
        base = event_identity("M", "2025-01-01", "NY")

        self.assertEqual(base, event_identity("M", "2025-01-01", "NY"))
        self.assertNotEqual(base, event_identity("M", "2025-01-01", "LA"))
        self.assertNotEqual(base, event_identity("M", "2025-01-02", "NY"))
        self.assertNotEqual(base, event_identity("N", "2025-01-01", "NY"))

    def test_separator_inside_a_part_can_collide(self) -> None:
        self.assertEqual(event_identity("A-B"), event_identity("A", "B-unknown"))

    def test_key_column_fits_longest_parts(self) -> None:
        columns = Event.__table__.c
        longest = event_identity(
            "n" * columns.name.type.length,
            "d" * columns.date.type.length,
            "l" * columns.location.type.length,
        )

        self.assertEqual(len(longest), 512 + 255 + 512 + 2 * len(EVENT_KEY_SEPARATOR))
        self.assertLessEqual(len(longest), columns.event_key.type.length)


class LabelTests(unittest.TestCase):
    def test_known_kinds_map_case_insensitively(self) -> None:
        self.assertEqual(node_label_for("person"), "Person")
        self.assertEqual(node_label_for("Place"), "Place")
        self.assertEqual(node_label_for(" EVENT "), "Event")

    def test_unknown_kinds_fall_back_to_entity(self) -> None:
        self.assertEqual(node_label_for("organization"), "Entity")
        self.assertEqual(node_label_for(None), "Entity")

    def test_relationship_labels_are_uppercased_with_underscores(self) -> None:
        self.assertEqual(normalize_relationship_type("works for"), "WORKS_FOR")
        self.assertEqual(normalize_relationship_type("works_for"), "WORKS_FOR")
        self.assertEqual(normalize_relationship_type("  located-in  "), "LOCATED_IN")
        self.assertEqual(normalize_relationship_type("reports  to / manages"), "REPORTS_TO_MANAGES")

    def test_blank_relationship_label_gets_default(self) -> None:
        self.assertEqual(normalize_relationship_type(""), "RELATED_TO")
        self.assertEqual(normalize_relationship_type(" -- "), "RELATED_TO")


if __name__ == "__main__":
    unittest.main()
