import unittest

from named_bools import BN8, BN16, BN32, BN64, BN128, BitWidth, NamedBools
from named_bools.errors import CapacityExceeded, InvalidPattern, NameNotFound, PatternExhausted


class TestFixedContainer(unittest.TestCase):
    def setUp(self):
        self.bools = BN8()

    def test_new_is_empty(self):
        self.assertEqual(len(self.bools), 0)
        self.assertEqual(self.bools.get_raw(), 0)
        self.assertEqual(self.bools.all(), [])
        self.assertEqual(self.bools.capacity, 8)

    def test_set_and_get(self):
        self.bools.set("a", True)
        self.bools.set("b", False)
        self.assertTrue(self.bools.get("a"))
        self.assertFalse(self.bools.get("b"))
        self.assertEqual(self.bools.get_raw(), 0b01)
        self.assertEqual(self.bools.names(), {"a": 0, "b": 1})

    def test_set_is_idempotent(self):
        self.bools.set("a", True)
        self.bools.set("a", True)
        self.assertTrue(self.bools.get("a"))
        self.assertEqual(len(self.bools), 1)

    def test_capacity_exceeded(self):
        for i in range(8):
            self.bools.set(f"f{i}", True)
        self.assertEqual(self.bools.get_raw(), 0xFF)
        with self.assertRaises(CapacityExceeded) as ctx:
            self.bools.set("extra", True)
        self.assertEqual(ctx.exception.capacity, 8)
        self.assertNotIn("extra", self.bools)
        # existing names can still be updated
        self.bools.set("f3", False)
        self.assertEqual(self.bools.get_raw(), 0xF7)

    def test_every_width_fills_exactly(self):
        for cls in (BN8, BN16, BN32, BN64, BN128):
            bools = cls()
            for i in range(cls.WIDTH):
                bools.set(f"f{i}", i % 2 == 0)
            self.assertEqual(len(set(bools.names().values())), cls.WIDTH)
            with self.assertRaises(CapacityExceeded):
                bools.set("overflow", True)

    def test_width_typed_class_rejects_other_widths(self):
        with self.assertRaises(ValueError):
            BN8(16)
        with self.assertRaises(ValueError):
            BN32(BitWidth.U64)
        self.assertEqual(BN8(8).capacity, 8)
        self.assertEqual(BN16(BitWidth.U16).capacity, 16)

    def test_width_from_enum_and_int(self):
        self.assertEqual(NamedBools(BitWidth.U32).capacity, 32)
        self.assertEqual(NamedBools(16).capacity, 16)
        with self.assertRaises(ValueError):
            NamedBools(7)
        with self.assertRaises(TypeError):
            NamedBools()

    def test_get_missing_name_suggests(self):
        self.bools.set("enabled", True)
        with self.assertRaises(NameNotFound) as ctx:
            self.bools.get("enabeld")
        self.assertEqual(ctx.exception.name, "enabeld")
        self.assertEqual(ctx.exception.suggestions, ["enabled"])
        self.assertIn("did you mean", str(ctx.exception))

    def test_remove_frees_lowest_index(self):
        for name in ("a", "b", "c", "d"):
            self.bools.set(name, True)
        self.bools.remove("c")
        self.bools.remove("b")
        with self.assertRaises(NameNotFound):
            self.bools.get("c")
        self.assertEqual(self.bools.get_raw(), 0b1001)

        self.bools.set("e", False)
        self.bools.set("f", True)
        self.bools.set("g", True)
        self.assertEqual(self.bools.names(), {"a": 0, "d": 3, "e": 1, "f": 2, "g": 4})

    def test_remove_missing(self):
        with self.assertRaises(NameNotFound):
            self.bools.remove("nope")

    def test_removed_slot_counts_toward_capacity(self):
        for i in range(8):
            self.bools.set(f"f{i}", True)
        self.bools.remove("f5")
        self.bools.set("new", False)
        self.assertEqual(self.bools.names()["new"], 5)

    def test_toggle_and_mass_ops(self):
        self.bools.set("a", True)
        self.bools.set("b", False)
        self.bools.toggle("a")
        self.assertFalse(self.bools.get("a"))
        self.bools.mass_toggle(["a", "b"])
        self.assertEqual(self.bools.mass_get(["a", "b"]), [True, True])
        with self.assertRaises(NameNotFound):
            self.bools.mass_toggle(["a", "missing"])
        self.assertEqual(self.bools.mass_get(["a", "b"]), [True, True])
        with self.assertRaises(NameNotFound):
            self.bools.toggle("missing")

    def test_clear(self):
        self.bools.set("a", True)
        self.bools.clear()
        self.assertEqual(len(self.bools), 0)
        self.assertEqual(self.bools.get_raw(), 0)
        self.bools.set("b", True)
        self.assertEqual(self.bools.names(), {"b": 0})

    def test_raw_popcount_includes_unnamed_bits(self):
        bools = BN8.from_raw(0b1100)
        bools.set("x", True)
        bools.set("y", False)
        self.assertEqual(bools.raw_popcount(), 3)
        self.assertEqual(bools.count_true(), 1)

    def test_from_raw(self):
        bools = BN8.from_raw(0b100)
        self.assertEqual(bools.get_raw(), 4)
        self.assertEqual(len(bools), 0)
        bools.set("x", True)
        self.assertEqual(bools.get_raw(), 0b101)
        with self.assertRaises(ValueError):
            BN8.from_raw(256)
        self.assertEqual(NamedBools.from_raw(3, 16).capacity, 16)


class TestFixedMassSet(unittest.TestCase):
    def test_repeating_values(self):
        bools = BN8()
        bools.mass_set(4, "flag_{n}", "true,false{r}")
        self.assertEqual(bools.all(), [
            ("flag_0", True), ("flag_1", False), ("flag_2", True), ("flag_3", False),
        ])

    def test_exhausted_values(self):
        bools = BN8()
        with self.assertRaises(PatternExhausted):
            bools.mass_set(3, "f_{n}", "true,false")
        self.assertEqual(len(bools), 0)

    def test_invalid_pattern(self):
        bools = BN8()
        with self.assertRaises(InvalidPattern):
            bools.mass_set(2, "f", "true{r}")
        with self.assertRaises(InvalidPattern):
            bools.mass_set(2, "f_{n}", "")

    def test_oversized_count_fails_without_expanding_names(self):
        bools = BN8()
        bools.set("keep", True)
        with self.assertRaises(CapacityExceeded) as ctx:
            bools.mass_set(2_000_000, "f_{n}", "true{r}")
        self.assertEqual(ctx.exception.needed, 1_999_999)
        self.assertEqual(bools.all(), [("keep", True)])

    def test_capacity_checked_before_writing(self):
        bools = BN8()
        bools.set("keep", True)
        with self.assertRaises(CapacityExceeded) as ctx:
            bools.mass_set(8, "f_{n}", "true{r}")
        self.assertEqual(ctx.exception.needed, 8)
        self.assertEqual(bools.all(), [("keep", True)])

    def test_existing_names_do_not_need_room(self):
        bools = BN8()
        bools.mass_set(8, "f_{n}", "false{r}")
        bools.mass_set(8, "f_{n}", "true{r}")
        self.assertEqual(bools.get_raw(), 0xFF)
        self.assertEqual(len(bools), 8)


class TestFixedOrdering(unittest.TestCase):
    def setUp(self):
        self.bools = BN16()
        for name, value in (("delta", True), ("alpha", False), ("charlie", True), ("bravo", False)):
            self.bools.set(name, value)

    def test_sort_by_name_keeps_bits(self):
        raw = self.bools.get_raw()
        before = dict(self.bools.all())
        self.bools.sort_by_name()
        names = [name for name, _ in self.bools.all()]
        self.assertEqual(names, ["alpha", "bravo", "charlie", "delta"])
        self.assertEqual(dict(self.bools.all()), before)
        self.assertEqual(self.bools.get_raw(), raw)

    def test_sort_by_value_is_stable(self):
        self.bools.sort_by_name()
        self.bools.sort_by_value()
        self.assertEqual(self.bools.all(), [
            ("alpha", False), ("bravo", False), ("delta", True), ("charlie", True),
        ])

    def test_sorted_copy_leaves_original(self):
        copy = self.bools.sorted_by_name()
        self.assertEqual([n for n, _ in self.bools.all()][0], "delta")
        self.assertEqual([n for n, _ in copy.all()][0], "alpha")
        copy.set("alpha", True)
        self.assertFalse(self.bools.get("alpha"))

    def test_display(self):
        self.assertEqual(self.bools.render_raw(), "0000000000000101")
        self.assertEqual(str(self.bools).splitlines()[0], "delta: true")
        self.assertEqual(repr(self.bools), "BN16(size=4, capacity=16)")
        self.assertEqual(self.bools.count_true(), 2)

    def test_entries_and_iteration(self):
        entries = self.bools.entries()
        self.assertEqual(entries[0].to_dict(), {"name": "delta", "index": 0, "value": True})
        self.assertEqual(list(self.bools), self.bools.all())
        self.assertEqual(self.bools.bools(), [True, False, True, False])

    def test_equality(self):
        self.assertEqual(self.bools, self.bools.copy())
        other = self.bools.copy()
        other.sort_by_name()
        self.assertNotEqual(self.bools, other)


if __name__ == "__main__":
    unittest.main()
