# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.
"""Combine operators commonly used with segment trees.

Each operator is also registered as a gin constant so that configs can
choose it, e.g. ``IntegerSegmentTree.op = %segtree.MAX``.
"""

import operator

import gin


def logical_and(left, right):
    return left and right


def logical_or(left, right):
    return left or right


def logical_xor(left, right):
    return left != right


ADD = operator.add
MAX = max
MIN = min
AND = logical_and
OR = logical_or
XOR = logical_xor
# not commutative, useful to check that segments are combined in order
CONCAT = operator.concat

gin.constant('segtree.ADD', ADD)
gin.constant('segtree.MAX', MAX)
gin.constant('segtree.MIN', MIN)
gin.constant('segtree.AND', AND)
gin.constant('segtree.OR', OR)
gin.constant('segtree.XOR', XOR)
gin.constant('segtree.CONCAT', CONCAT)
