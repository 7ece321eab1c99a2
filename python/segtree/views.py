# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.
"""Sequence protocol shared by segment trees and the views into them."""

from abc import abstractmethod
from collections.abc import Sequence

import numpy as np
from absl import logging

from segtree.errors import (IllegalCursorState, IndexOutOfRange,
                            InvalidRange, TypeMismatch, UnsupportedMutation)


class FixedSizeSequence(Sequence):
    """A sequence whose elements can be replaced but never added or removed.

    Subclasses provide element access (``get``/``update``), range
    combination and view creation. Everything a python list offers on top
    of that is derived here, and every operation which would change the
    number of elements raises ``UnsupportedMutation``.
    """

    @property
    @abstractmethod
    def dtype(self):
        """numpy dtype of the elements, ``object`` for arbitrary values."""

    @abstractmethod
    def get(self, index):
        pass

    @abstractmethod
    def update(self, index, value):
        """Replace the element at ``index`` and return the root combination."""

    @abstractmethod
    def combination(self, left=None, right=None):
        pass

    @abstractmethod
    def window(self, from_index, to_index):
        pass

    @abstractmethod
    def cursor(self, start=0):
        pass

    def size(self):
        return len(self)

    def set(self, index, value):
        """Replace the element at ``index``.

        Returns:
            the element previously stored at ``index``
        """
        previous = self.get(index)
        self.update(index, value)
        return previous

    def __getitem__(self, index):
        return self.get(index)

    def __setitem__(self, index, value):
        self.update(index, value)

    def __iter__(self):
        return self.cursor()

    def __eq__(self, other):
        """Element-wise comparison with another tree, window or list."""
        if not isinstance(other, (FixedSizeSequence, list)):
            return NotImplemented
        return len(self) == len(other) and all(
            a == b for a, b in zip(self, other))

    # elements can be replaced, so the value of a sequence is not stable
    __hash__ = None

    def to_list(self):
        return list(self)

    def to_array(self, out=None):
        """Copy the elements into a one dimensional numpy array.

        Args:
            out (np.ndarray|None): buffer to fill. Its dtype must be the same
                as ``self.dtype``. A new array is allocated if it is None or
                shorter than this sequence.
        Returns:
            np.ndarray holding the elements in index order
        """
        dtype = self.dtype
        size = len(self)
        if out is not None:
            if not isinstance(out, np.ndarray):
                raise TypeMismatch(dtype, type(out).__name__)
            if out.dtype != dtype:
                raise TypeMismatch(dtype, out.dtype)
            if out.shape[0] < size:
                logging.debug("buffer of length %d is too short for %d "
                              "elements, allocating a new one", out.shape[0],
                              size)
                out = None
        if out is None:
            out = np.empty(size, dtype=dtype)
        for i, value in enumerate(self):
            out[i] = value
        return out

    def append(self, value):
        raise UnsupportedMutation("append")

    def extend(self, values):
        raise UnsupportedMutation("extend")

    def insert(self, index, value):
        raise UnsupportedMutation("insert")

    def remove(self, value):
        raise UnsupportedMutation("remove")

    def pop(self, index=-1):
        raise UnsupportedMutation("pop")

    def clear(self):
        raise UnsupportedMutation("clear")

    def __delitem__(self, index):
        raise UnsupportedMutation("del")

    def __iadd__(self, values):
        raise UnsupportedMutation("+=")

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.to_list())


class SegmentTreeCursor(object):
    """Bidirectional iterator over ``[lo, hi)`` of a segment tree.

    Like a java ListIterator the cursor sits between two elements: ``next``
    returns the element after it, ``previous`` the one before it, and
    ``set`` replaces whichever element was returned last. Indices reported
    by ``next_index``/``previous_index`` are relative to ``lo``.
    """

    def __init__(self, tree, position, lo, hi):
        """
        Args:
            tree (FixedSizeSegmentTree): the tree owning the elements
            position (int): index in ``tree`` of the element ``next``
                returns first
            lo (int): first index of the range in ``tree``
            hi (int): end (exclusive) of the range in ``tree``
        """
        self._tree = tree
        self._position = position
        self._lo = lo
        self._hi = hi
        self._last = None

    def __iter__(self):
        return self

    def __next__(self):
        if self._position >= self._hi:
            raise StopIteration
        self._last = self._position
        self._position += 1
        return self._tree.get(self._last)

    def has_next(self):
        return self._position < self._hi

    def has_previous(self):
        return self._position > self._lo

    def previous(self):
        if self._position <= self._lo:
            raise IndexOutOfRange(-1, self._hi - self._lo)
        self._position -= 1
        self._last = self._position
        return self._tree.get(self._last)

    def next_index(self):
        return self._position - self._lo

    def previous_index(self):
        return self._position - self._lo - 1

    def set(self, value):
        """Replace the element last returned by ``next`` or ``previous``."""
        if self._last is None:
            raise IllegalCursorState(
                "set() called before next() or previous()")
        self._tree.update(self._last, value)

    def add(self, value):
        raise UnsupportedMutation("add")

    def remove(self):
        raise UnsupportedMutation("remove")


class SegmentTreeWindow(FixedSizeSequence):
    """A view of ``length`` elements of a tree starting at ``offset``.

    The window never copies: reads, writes and range combinations are
    translated by ``offset`` and forwarded to the owning tree, so changes
    made through either side are visible through the other.
    """

    def __init__(self, owner, offset, length):
        self._owner = owner
        self._offset = offset
        self._length = length

    @property
    def owner(self):
        return self._owner

    @property
    def offset(self):
        return self._offset

    @property
    def dtype(self):
        return self._owner.dtype

    def __len__(self):
        return self._length

    def _check_index(self, index):
        if not 0 <= index < self._length:
            raise IndexOutOfRange(index, self._length)

    def get(self, index):
        self._check_index(index)
        return self._owner.get(index + self._offset)

    def update(self, index, value):
        """Replace a element of the window.

        Returns:
            the combination of all the elements of the owning tree
        """
        self._check_index(index)
        return self._owner.update(index + self._offset, value)

    def combination(self, left=None, right=None):
        """Combination of ``[left, right)`` in window coordinates.

        Without arguments the whole window is combined.
        """
        if left is None:
            left = 0
        if right is None:
            right = self._length
        if not 0 <= left < right <= self._length:
            raise InvalidRange(left, right, self._length)
        return self._owner.combination(left + self._offset,
                                       right + self._offset)

    def window(self, from_index, to_index):
        if not 0 <= from_index < to_index <= self._length:
            raise InvalidRange(from_index, to_index, self._length)
        return SegmentTreeWindow(self._owner, self._offset + from_index,
                                 to_index - from_index)

    def cursor(self, start=0):
        if not 0 <= start <= self._length:
            raise IndexOutOfRange(start, self._length)
        return SegmentTreeCursor(self._owner, self._offset + start,
                                 self._offset, self._offset + self._length)
