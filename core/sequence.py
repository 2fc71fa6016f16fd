"""core/sequence.py - 可重定位游标的有序序列"""


class RepositionableSequence:
    """
    带内部游标的有序序列，可反复遍历

    游标位置越界（first 之前或末尾之后）时 current/next/previous 返回 None，
    且越界后 next/previous 不再移动，需要 first()/reset() 回到开头。
    """

    def __init__(self, items=None):
        self._items = list(items) if items is not None else []
        self._position = 0

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __iter__(self):
        # 独立于游标
        return iter(list(self._items))

    def __repr__(self):
        return f"{type(self).__name__}({self._items!r})"

    def _valid(self):
        return 0 <= self._position < len(self._items)

    def append(self, item):
        self._items.append(item)

    def replace(self, key, item):
        """用新元素替换 key 位置的元素，游标不动"""
        self._items[key] = item

    def reset(self):
        self._position = 0
        return self.current()

    def first(self):
        return self.reset()

    def current(self):
        if self._valid():
            return self._items[self._position]
        return None

    def key(self):
        if self._valid():
            return self._position
        return None

    def next(self):
        if not self._valid():
            return None
        self._position += 1
        return self.current()

    def previous(self):
        if not self._valid():
            return None
        self._position -= 1
        return self.current()

    def peek(self):
        """查看下一个元素，不移动游标"""
        position = self._position
        item = self.next()
        self._position = position
        return item


class SequenceCursorMixin:
    """把游标接口委托给 self._sequence"""

    _sequence: RepositionableSequence

    def __len__(self):
        return len(self._sequence)

    def __getitem__(self, index):
        return self._sequence[index]

    def __iter__(self):
        return iter(self._sequence)

    def replace(self, key, item):
        self._sequence.replace(key, item)

    def reset(self):
        return self._sequence.reset()

    def first(self):
        return self._sequence.first()

    def current(self):
        return self._sequence.current()

    def key(self):
        return self._sequence.key()

    def next(self):
        return self._sequence.next()

    def previous(self):
        return self._sequence.previous()

    def peek(self):
        return self._sequence.peek()
