# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.

import operator

import gin
import numpy as np
from absl import logging

from segtree.errors import (EmptyTreeError, IndexOutOfRange, InvalidRange,
                            TypeMismatch)
from segtree.views import (FixedSizeSequence, SegmentTreeCursor,
                           SegmentTreeWindow)


@gin.configurable
class FixedSizeSegmentTree(FixedSizeSequence):
    """
    Data structure to allow efficient calculate the combination of a segment
    of elements.
    See https://en.wikipedia.org/wiki/Segment_tree for detail.

    The operator only needs to be associative, it does not need to be
    commutative: a segment ``[left, right)`` is always combined from left to
    right, i.e. ``op(op(e[left], e[left + 1]), ...)``. Elements can be
    replaced but the number of elements is fixed at construction.

    Node ``1`` is the root, node ``i`` has children ``2i`` and ``2i + 1``.
    The node of element ``k`` is found by bisecting ``[0, size)`` from the
    root, so the tree stays balanced when size is not a power of two.
    """

    def __init__(self, op, elements, dtype=None):
        """
        Arguments
          op: an associative binary operator.
          elements: the initial elements. Their number is the size of the
            tree.
          dtype: if not None, the numpy dtype in which elements are stored.
            Otherwise elements are stored as arbitrary python objects.
        """
        self._dtype = np.dtype(object if dtype is None else dtype)
        elements = [self._coerce(val) for val in elements]
        size = len(elements)
        if size == 0:
            raise EmptyTreeError()
        if size == 1:
            leaf_capacity = 1
        else:
            leaf_capacity = 1 << (size - 1).bit_length()
        if dtype is None:
            vals = [None] * (2 * leaf_capacity)
        else:
            vals = np.zeros(2 * leaf_capacity, dtype=self._dtype)
        self._size = size
        self._op = op
        self._vals = vals
        self._slot_of = self._place_elements(elements, leaf_capacity)
        logging.debug("%s built: size=%d, leaf capacity=%d",
                      type(self).__name__, size, leaf_capacity)

    @classmethod
    def full(cls, size, fill_value, **kwargs):
        """Create a tree with ``size`` copies of ``fill_value``.

        The other constructor arguments (e.g. ``op``) are passed by keyword.
        """
        return cls(elements=[fill_value] * size, **kwargs)

    def _place_elements(self, elements, leaf_capacity):
        """Put every element into its leaf and compute all internal nodes.

        Returns:
            list mapping the index of each element to its node
        """
        op = self._op
        vals = self._vals
        size = self._size
        last_internal = leaf_capacity // 2
        slot_of = [0] * size
        idx = 0
        while idx < size:
            node = 1
            left, right = 0, size
            while right - left > 1:
                if node >= last_internal:
                    # Both children of a node at the last internal level
                    # are leaves, so place two neighbours in one go.
                    vals[2 * node] = elements[idx]
                    vals[2 * node + 1] = elements[idx + 1]
                    vals[node] = op(vals[2 * node], vals[2 * node + 1])
                    slot_of[idx] = 2 * node
                    slot_of[idx + 1] = 2 * node + 1
                    idx += 1
                    break
                middle = (left + right) // 2
                if idx < middle:
                    right = middle
                    node = 2 * node
                else:
                    left = middle
                    node = 2 * node + 1
            else:
                vals[node] = elements[idx]
                slot_of[idx] = node
            idx += 1
        for node in range(last_internal - 1, 0, -1):
            vals[node] = op(vals[2 * node], vals[2 * node + 1])
        return slot_of

    @property
    def dtype(self):
        return self._dtype

    @property
    def op(self):
        return self._op

    def __len__(self):
        return self._size

    def _item(self, val):
        if self._dtype.kind == "O":
            return val
        return self._dtype.type(val).item()

    def _coerce(self, val):
        """Convert ``val`` to the storage dtype, refusing lossy conversions
        such as 2.9 into an integer.
        """
        if self._dtype.kind == "O":
            return val
        stored = self._dtype.type(val)
        if stored != val:
            raise TypeMismatch(self._dtype, repr(val), what="Value")
        return stored

    def _check_index(self, idx):
        if not 0 <= idx < self._size:
            raise IndexOutOfRange(idx, self._size)

    def get(self, idx):
        self._check_index(idx)
        return self._item(self._vals[self._slot_of[idx]])

    def update(self, idx, val):
        """Replace the element at ``idx``.

        Only the nodes on the path from the leaf of ``idx`` to the root are
        recomputed.

        Returns:
            the combination of all the elements after the replacement
        """
        self._check_index(idx)
        val = self._coerce(val)
        op = self._op
        vals = self._vals
        node = self._slot_of[idx]
        vals[node] = val
        node //= 2
        while node >= 1:
            vals[node] = op(vals[2 * node], vals[2 * node + 1])
            node //= 2
        return self._item(vals[1])

    def summary(self):
        """Combination of all the elements."""
        return self._item(self._vals[1])

    def combination(self, left=None, right=None):
        """Combination of the elements in ``[left, right)``.

        Without arguments this is the combination of all the elements. An
        omitted ``left`` means 0 and an omitted ``right`` means the size.
        """
        size = self._size
        if left is None and right is None:
            return self.summary()
        if left is None:
            left = 0
        if right is None:
            right = size
        if not 0 <= left < right <= size:
            raise InvalidRange(left, right, size)
        if left == 0:
            if right == size:
                result = self._vals[1]
            else:
                result = self._prefix(right, 0, size, 1)
        elif right == size:
            result = self._suffix(left, 0, size, 1)
        else:
            result = self._inner(left, right)
        return self._item(result)

    def _prefix(self, right, lo, hi, node):
        """Combination of ``[lo, right)`` under ``node``, which covers
        ``[lo, hi)`` with ``lo < right < hi``.
        """
        op = self._op
        vals = self._vals
        start = lo
        result = None
        while True:
            middle = (lo + hi) // 2
            if right < middle:
                hi = middle
                node = 2 * node
                continue
            # the left child lies entirely inside the segment
            if lo == start:
                result = vals[2 * node]
            else:
                result = op(result, vals[2 * node])
            if right == middle:
                return result
            lo = middle
            node = 2 * node + 1

    def _suffix(self, left, lo, hi, node):
        """Combination of ``[left, hi)`` under ``node``, which covers
        ``[lo, hi)`` with ``lo < left < hi``.
        """
        op = self._op
        vals = self._vals
        end = hi
        result = None
        while True:
            middle = (lo + hi) // 2
            if left > middle:
                lo = middle
                node = 2 * node + 1
                continue
            # the right child lies entirely inside the segment
            if hi == end:
                result = vals[2 * node + 1]
            else:
                result = op(vals[2 * node + 1], result)
            if left == middle:
                return result
            hi = middle
            node = 2 * node

    def _inner(self, left, right):
        """Combination of ``[left, right)``, ``0 < left < right < size``."""
        lo, hi = 0, self._size
        node = 1
        while True:
            middle = (lo + hi) // 2
            if right == middle:
                return self._suffix(left, lo, middle, 2 * node)
            if right < middle:
                hi = middle
                node = 2 * node
                continue
            if left == middle:
                return self._prefix(right, middle, hi, 2 * node + 1)
            if left > middle:
                lo = middle
                node = 2 * node + 1
                continue
            # node is the lowest one split by both borders
            return self._op(
                self._suffix(left, lo, middle, 2 * node),
                self._prefix(right, middle, hi, 2 * node + 1))

    def window(self, from_index, to_index):
        """A view of the elements in ``[from_index, to_index)``.

        The view shares the storage of this tree.
        """
        if not 0 <= from_index < to_index <= self._size:
            raise InvalidRange(from_index, to_index, self._size)
        return SegmentTreeWindow(self, from_index, to_index - from_index)

    def cursor(self, start=0):
        """Bidirectional iterator whose first ``next`` is ``self[start]``."""
        if not 0 <= start <= self._size:
            raise IndexOutOfRange(start, self._size)
        return SegmentTreeCursor(self, start, 0, self._size)


def tree_structure_str(tree):
    """Render every node of ``tree`` for debugging.

    Internal nodes are written as ``value = {left, right}``, e.g. a sum tree
    of ``[1, 2, 3]`` gives ``SumSegmentTree: {6 = {1, 5 = {2, 3}}}``.
    """
    parts = [type(tree).__name__, ": {"]
    _append_node(tree, 0, len(tree), 1, parts)
    parts.append("}")
    return "".join(parts)


def _append_node(tree, lo, hi, node, parts):
    parts.append(str(tree._item(tree._vals[node])))
    if hi - lo > 1:
        middle = (lo + hi) // 2
        parts.append(" = {")
        _append_node(tree, lo, middle, 2 * node, parts)
        parts.append(", ")
        _append_node(tree, middle, hi, 2 * node + 1, parts)
        parts.append("}")


class SumSegmentTree(FixedSizeSegmentTree):
    def __init__(self, elements, dtype=None):
        super(SumSegmentTree, self).__init__(operator.add, elements, dtype)


class MaxSegmentTree(FixedSizeSegmentTree):
    def __init__(self, elements, dtype=None):
        super(MaxSegmentTree, self).__init__(max, elements, dtype)


class MinSegmentTree(FixedSizeSegmentTree):
    def __init__(self, elements, dtype=None):
        super(MinSegmentTree, self).__init__(min, elements, dtype)
