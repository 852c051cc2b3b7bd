"""
Ordered index over unique string keys.

An AVL tree whose nodes carry their subtree height and size, so that
insertion, lookup and closed-interval range counts all run in O(log n).
"""

import logging

logger = logging.getLogger(__name__)


class Node:
    def __init__(self, key, left, right):
        self.key = key
        self._left = left
        self._right = right
        self.parent = None
        self.height = 0
        self.size = 1

    def _update(self):
        self.height = 1 + max(self._left.height, self._right.height)
        self.size = 1 + self._left.size + self._right.size

    def _adopt(self, child):
        # the sentinel is shared by every empty slot, never give it a parent
        if child is not Node.sentinel:
            child.parent = self

    def set_left(self, left):
        self._left = left
        self._adopt(left)
        self._update()

    def set_right(self, right):
        self._right = right
        self._adopt(right)
        self._update()

    def left(self):
        return self._left

    def right(self):
        return self._right

    def balance(self):
        if self is Node.sentinel:
            return 0
        return self._left.height - self._right.height

    def __repr__(self):
        return 'Node(%r, height=%d, size=%d)' % (self.key, self.height, self.size)

Node.sentinel = Node(None, None, None)
Node.sentinel.height = -1
Node.sentinel.size = 0


class OrderedIndex:
    def __init__(self):
        self._root = Node.sentinel

    def _rotate_left(self, node):
        assert node is not Node.sentinel and node.right() is not Node.sentinel
        t = node.right()
        logger.debug('rotate left at %r, promoting %r', node.key, t.key)
        t.parent = node.parent
        node.set_right(t.left())
        t.set_left(node)
        return t

    def _rotate_right(self, node):
        assert node is not Node.sentinel and node.left() is not Node.sentinel
        t = node.left()
        logger.debug('rotate right at %r, promoting %r', node.key, t.key)
        t.parent = node.parent
        node.set_left(t.right())
        t.set_right(node)
        return t

    def _rebalance(self, node):
        """Restore the AVL condition at node, whose children are balanced.

        Returns the root of the rebalanced subtree, which is node itself
        when no rotation was needed.
        """
        bal = node.balance()
        if bal > 1:
            if node.left().balance() < 1:
                node.set_left(self._rotate_left(node.left()))
            return self._rotate_right(node)
        if bal < -1:
            if node.right().balance() > -1:
                node.set_right(self._rotate_right(node.right()))
            return self._rotate_left(node)
        return node

    def _insert(self, node, key):
        if node is Node.sentinel:
            return Node(key, Node.sentinel, Node.sentinel)

        if key == node.key:
            logger.debug('key %r already present, ignoring', key)
            return node

        if key < node.key:
            node.set_left(self._insert(node.left(), key))
        else:
            node.set_right(self._insert(node.right(), key))

        return self._rebalance(node)

    def insert(self, key):
        self._root = self._insert(self._root, key)
        self._root.parent = None

    def _find(self, node, key):
        if node is Node.sentinel:
            return None
        if key == node.key:
            return node
        if key < node.key:
            return self._find(node.left(), key)
        return self._find(node.right(), key)

    def find(self, key):
        """Return the node holding key, or None if it is not stored."""
        return self._find(self._root, key)

    def _count_less_or_equal(self, node, key):
        if node is Node.sentinel:
            return 0
        if node.key == key:
            return 1 + node.left().size
        if node.key > key:
            return self._count_less_or_equal(node.left(), key)
        return 1 + node.left().size + self._count_less_or_equal(node.right(), key)

    def _count_greater_or_equal(self, node, key):
        if node is Node.sentinel:
            return 0
        if node.key == key:
            return 1 + node.right().size
        if node.key < key:
            return self._count_greater_or_equal(node.right(), key)
        return 1 + node.right().size + self._count_greater_or_equal(node.left(), key)

    def _range_count(self, node, lo, hi):
        if node is Node.sentinel:
            return 0
        if hi < node.key:
            return self._range_count(node.left(), lo, hi)
        if lo > node.key:
            return self._range_count(node.right(), lo, hi)
        # lo <= node.key <= hi: the rest splits into one bound per side
        return (1 + self._count_greater_or_equal(node.left(), lo)
                + self._count_less_or_equal(node.right(), hi))

    def range_count(self, lo, hi):
        """Count the stored keys k with lo <= k <= hi."""
        if lo > hi:
            return 0
        return self._range_count(self._root, lo, hi)

    def _preorder_dump(self, node, parts):
        if node is not Node.sentinel:
            parts.append('%s(h = %d, s = %d)' % (node.key, node.height, node.size))
            self._preorder_dump(node.left(), parts)
            self._preorder_dump(node.right(), parts)

    def preorder_dump(self):
        parts = []
        self._preorder_dump(self._root, parts)
        return ''.join(parts)

    def _show(self, node, s):
        if node is not Node.sentinel:
            self._show(node.right(), s + 1)
            print(s * '\t', (node.key, node.height, node.size))
            self._show(node.left(), s + 1)

    def show(self):
        self._show(self._root, 0)

    def root(self):
        if self._root is Node.sentinel:
            return None
        return self._root

    def __contains__(self, key):
        return self.find(key) is not None

    def __len__(self):
        return self._root.size
