# Copyright (c) 2019 Horizon Robotics. All Rights Reserved.

import operator
import random
import time

import numpy as np
from absl import logging

from segtree import (FixedSizeSegmentTree, IntegerSegmentTree,
                     BooleanSegmentTree, operators)

# number of elements of each tree
tree_size = 100000
# number of updates and of range queries timed for each tree
num_ops = 100000
# also time a plain python list recomputing sum(vals[left:right])
time_naive_list = True


def run(name, tree, gen_value):
    size = len(tree)
    indices = np.random.randint(0, size, size=num_ops)
    values = [gen_value() for _ in range(num_ops)]
    start = time.time()
    for idx, val in zip(indices, values):
        tree.update(int(idx), val)
    update_time = time.time() - start

    segments = []
    for _ in range(num_ops):
        left = random.randint(0, size - 1)
        segments.append((left, random.randint(left + 1, size)))
    start = time.time()
    for left, right in segments:
        tree.combination(left, right)
    query_time = time.time() - start
    logging.info("%s: %.2f us/update, %.2f us/combination", name,
                 1e6 * update_time / num_ops, 1e6 * query_time / num_ops)


def run_naive(vals):
    size = len(vals)
    n = num_ops // 100
    start = time.time()
    for _ in range(n):
        left = random.randint(0, size - 1)
        sum(vals[left:random.randint(left + 1, size)])
    logging.info("python list: %.2f us/combination",
                 1e6 * (time.time() - start) / n)


def main():
    ints = [random.randint(0, 1000) for _ in range(tree_size)]
    start = time.time()
    generic = FixedSizeSegmentTree(operator.add, ints)
    logging.info("generic tree built in %.3f s", time.time() - start)
    run("generic int tree", generic, lambda: random.randint(0, 1000))

    start = time.time()
    integer = IntegerSegmentTree(operator.add, ints)
    logging.info("integer tree built in %.3f s", time.time() - start)
    run("integer tree", integer, lambda: random.randint(0, 1000))

    bools = [random.random() < 0.99 for _ in range(tree_size)]
    run("boolean tree", BooleanSegmentTree(operators.AND, bools),
        lambda: random.random() < 0.99)

    if time_naive_list:
        run_naive(ints)


if __name__ == "__main__":
    logging.set_verbosity(logging.INFO)
    main()
