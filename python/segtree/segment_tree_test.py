# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.

import functools
import operator
import random
import unittest

import numpy as np

from segtree.errors import (EmptyTreeError, IndexOutOfRange, InvalidRange,
                            TypeMismatch)
from segtree.segment_tree import (FixedSizeSegmentTree, MaxSegmentTree,
                                  MinSegmentTree, SumSegmentTree,
                                  tree_structure_str)


def compose(f, g):
    """Affine maps ``(a, b): x -> a * x + b``, ``f`` applied first."""
    return (f[0] * g[0], f[1] * g[0] + g[1])


def random_affine():
    return (random.randint(-3, 3), random.randint(-5, 5))


class TestSegmentTree(unittest.TestCase):
    def test_max_example(self):
        tree = MaxSegmentTree([3, 1, 4, 1, 5, 9, 2, 6])
        self.assertEqual(tree.combination(), 9)
        self.assertEqual(tree.combination(2, 5), 5)

    def test_max_tree(self):
        for size in [1, 2, 3, 4, 7, 8, 9, 15, 16, 128]:
            vals = [0] * size
            tree = MaxSegmentTree(vals)
            for _ in range(1000):
                i = random.randint(0, size - 1)
                v = random.randint(0, 1000000)
                vals[i] = v
                tree[i] = v
                self.assertEqual(tree.summary(), max(vals))
            for i in range(size):
                self.assertEqual(tree[i], vals[i])

    def test_min_tree(self):
        for size in [1, 5, 6, 17, 100]:
            vals = [random.randint(-1000, 1000) for _ in range(size)]
            tree = MinSegmentTree(vals)
            for _ in range(200):
                left = random.randint(0, size - 1)
                right = random.randint(left + 1, size)
                self.assertEqual(
                    tree.combination(left, right), min(vals[left:right]))

    def test_sum_tree(self):
        for size in [3, 1, 2, 3, 4, 7, 8, 9, 15, 16, 128]:
            vals = [random.randint(0, 1000000) for _ in range(size)]
            tree = SumSegmentTree(vals)
            self.assertEqual(tree.summary(), sum(vals))
            for _ in range(1000):
                i = random.randint(0, size - 1)
                v = random.randint(0, 1000000)
                vals[i] = v
                self.assertEqual(tree.update(i, v), sum(vals))
                self.assertEqual(tree.summary(), sum(vals))

    def test_concat_every_segment(self):
        for size in range(1, 41):
            vals = ["%s%d " % (chr(ord('a') + i % 26), i) for i in range(size)]
            tree = FixedSizeSegmentTree(operator.add, vals)
            self.assertEqual(tree.combination(), "".join(vals))
            for left in range(size):
                for right in range(left + 1, size + 1):
                    self.assertEqual(
                        tree.combination(left, right),
                        "".join(vals[left:right]))

    def test_non_commutative_updates(self):
        for size in range(1, 34):
            vals = [random_affine() for _ in range(size)]
            tree = FixedSizeSegmentTree(compose, vals)
            for _ in range(100):
                i = random.randint(0, size - 1)
                v = random_affine()
                vals[i] = v
                root = tree.update(i, v)
                expected = functools.reduce(compose, vals)
                self.assertEqual(root, expected)
                self.assertEqual(tree.combination(), expected)
                left = random.randint(0, size - 1)
                right = random.randint(left + 1, size)
                self.assertEqual(
                    tree.combination(left, right),
                    functools.reduce(compose, vals[left:right]))
            self.assertEqual(tree.to_list(), vals)

    def test_omitted_borders(self):
        tree = FixedSizeSegmentTree(operator.add, ["a", "b", "c", "d", "e"])
        self.assertEqual(tree.combination(right=3), "abc")
        self.assertEqual(tree.combination(left=3), "de")
        self.assertEqual(tree.combination(0, 5), "abcde")

    def test_update_only_touches_path_to_root(self):
        calls = [0]

        def counting_add(a, b):
            calls[0] += 1
            return a + b

        tree = FixedSizeSegmentTree(counting_add, list(range(100)))
        # leaf capacity is 128, i.e. at most 7 ancestors per leaf
        for i in range(100):
            calls[0] = 0
            tree.update(i, i)
            self.assertLessEqual(calls[0], 7)
            self.assertGreaterEqual(calls[0], 6)

    def test_update_keeps_other_elements(self):
        vals = list(range(13))
        tree = SumSegmentTree(vals)
        tree.update(6, 100)
        vals[6] = 100
        self.assertEqual(tree.to_list(), vals)
        self.assertEqual(tree.combination(), sum(vals))

    def test_set_returns_previous(self):
        tree = SumSegmentTree([1, 2, 3])
        self.assertEqual(tree.set(1, 20), 2)
        self.assertEqual(tree[1], 20)
        self.assertEqual(tree.combination(), 24)

    def test_single_element(self):
        tree = FixedSizeSegmentTree(operator.add, ["x"])
        self.assertEqual(len(tree), 1)
        self.assertEqual(tree.size(), 1)
        self.assertEqual(tree[0], "x")
        self.assertEqual(tree.combination(), "x")
        self.assertEqual(tree.combination(0, 1), "x")
        self.assertEqual(tree.update(0, "y"), "y")
        self.assertEqual(tree.combination(), "y")

    def test_empty_tree(self):
        with self.assertRaises(EmptyTreeError):
            FixedSizeSegmentTree(operator.add, [])
        with self.assertRaises(ValueError):
            SumSegmentTree(iter([]))

    def test_invalid_range(self):
        tree = SumSegmentTree([1, 2, 3, 4, 5])
        for left, right in [(-1, 3), (0, 6), (3, 3), (4, 2), (5, 5)]:
            with self.assertRaises(InvalidRange):
                tree.combination(left, right)
        with self.assertRaises(ValueError):
            tree.combination(2, 1)

    def test_index_out_of_range(self):
        tree = SumSegmentTree([1, 2, 3, 4, 5])
        for idx in [-1, 5, 100]:
            with self.assertRaises(IndexOutOfRange):
                tree.get(idx)
            with self.assertRaises(IndexOutOfRange):
                tree.update(idx, 0)
            with self.assertRaises(IndexError):
                tree[idx] = 0
        self.assertEqual(tree.to_list(), [1, 2, 3, 4, 5])
        self.assertEqual(tree.combination(), 15)

    def test_full(self):
        self.assertEqual(SumSegmentTree.full(5, 2).combination(), 10)
        tree = FixedSizeSegmentTree.full(3, "a", op=operator.add)
        self.assertEqual(tree.combination(), "aaa")

    def test_typed_storage(self):
        tree = SumSegmentTree([1.5, 2.5, 3.0], dtype=np.float64)
        self.assertEqual(tree.dtype, np.float64)
        self.assertEqual(tree.combination(), 7.0)
        self.assertIsInstance(tree.combination(0, 2), float)
        self.assertEqual(SumSegmentTree([1, 2]).dtype, np.dtype(object))

    def test_generic_to_array(self):
        tree = FixedSizeSegmentTree(operator.add, ["ab", "c", "de"])
        array = tree.to_array()
        self.assertEqual(array.dtype, np.dtype(object))
        self.assertEqual(list(array), ["ab", "c", "de"])
        out = np.empty(3, dtype=object)
        self.assertIs(tree.to_array(out), out)
        with self.assertRaises(TypeMismatch):
            tree.to_array(np.zeros(3, dtype=np.int64))
        with self.assertRaises(TypeMismatch):
            tree.to_array(["", "", ""])

    def test_construct_from_generator(self):
        tree = SumSegmentTree(x * x for x in range(4))
        self.assertEqual(tree.combination(), 14)
        tree = SumSegmentTree((x for x in [1.5, 2.5]), dtype=np.float64)
        self.assertEqual(tree.combination(), 4.0)

    def test_tree_structure_str(self):
        tree = SumSegmentTree([1, 2, 3])
        self.assertEqual(
            tree_structure_str(tree), "SumSegmentTree: {6 = {1, 5 = {2, 3}}}")
        self.assertEqual(repr(tree), "SumSegmentTree([1, 2, 3])")


if __name__ == '__main__':
    unittest.main()
