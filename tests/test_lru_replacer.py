from tubdb.lru_replacer import LRUReplacer


def test_empty_replacer_has_no_victim():
    replacer = LRUReplacer(4)
    assert replacer.victim() is None
    assert len(replacer) == 0


def test_victims_in_unpin_order():
    replacer = LRUReplacer(7)
    for frame in [1, 2, 3, 4, 5, 6]:
        replacer.unpin(frame)
    replacer.unpin(1)
    assert len(replacer) == 6
    assert [replacer.victim() for _ in range(3)] == [1, 2, 3]
    assert len(replacer) == 3


def test_pin_removes_frame():
    replacer = LRUReplacer(7)
    for frame in [4, 5, 6]:
        replacer.unpin(frame)
    replacer.pin(3)
    replacer.pin(4)
    assert len(replacer) == 2
    replacer.unpin(4)
    assert [replacer.victim() for _ in range(3)] == [5, 6, 4]
    assert replacer.victim() is None


def test_duplicate_unpin_keeps_original_position():
    replacer = LRUReplacer(3)
    replacer.unpin(1)
    replacer.unpin(2)
    replacer.unpin(1)
    assert len(replacer) == 2
    assert replacer.victim() == 1