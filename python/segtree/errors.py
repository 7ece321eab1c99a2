# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.
"""Errors raised by segment trees and their views.

Every error is a programming error on the caller's side. They are raised
before any state is touched, so a tree is never left half updated.
"""


class SegmentTreeError(Exception):
    """Base class of all segment tree errors."""


class IndexOutOfRange(SegmentTreeError, IndexError):
    def __init__(self, index, size):
        super(IndexOutOfRange, self).__init__(
            "Index: %s, Size: %s" % (index, size))
        self.index = index
        self.size = size


class InvalidRange(SegmentTreeError, ValueError):
    def __init__(self, left, right, size):
        super(InvalidRange, self).__init__(
            "Invalid range [%s, %s) for size %s, expect "
            "0 <= left < right <= size" % (left, right, size))
        self.left = left
        self.right = right
        self.size = size


class EmptyTreeError(SegmentTreeError, ValueError):
    def __init__(self):
        super(EmptyTreeError,
              self).__init__("A segment tree needs at least one element")


class UnsupportedMutation(SegmentTreeError, NotImplementedError):
    """The size of a segment tree is fixed at construction."""

    def __init__(self, operation):
        super(UnsupportedMutation, self).__init__(
            "%s is not supported: segment trees have a fixed size" %
            operation)


class TypeMismatch(SegmentTreeError, TypeError):
    def __init__(self, expected, actual, what="Buffer dtype"):
        super(TypeMismatch, self).__init__(
            "%s %s does not match element dtype %s" % (what, actual,
                                                       expected))
        self.expected = expected
        self.actual = actual


class IllegalCursorState(SegmentTreeError, RuntimeError):
    pass
