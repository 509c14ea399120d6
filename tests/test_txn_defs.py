import pytest

from rmdb.defs import Rid
from rmdb.txn_defs import (
    AbortReason,
    LockDataId,
    LockDataType,
    TransactionAbortException,
    WriteRecord,
    WType,
)


def test_table_lock_id_packs_to_fd():
    lock_id = LockDataId.table(7)
    assert lock_id.type is LockDataType.TABLE
    assert lock_id.rid == Rid(-1, -1)
    assert lock_id.get() == 7


def test_record_lock_id_sets_sign_bit():
    lock_id = LockDataId.record(3, Rid(2, 5))
    assert lock_id.type is LockDataType.RECORD
    assert lock_id.get() < 0
    assert lock_id.get() >= -(1 << 63)


def test_record_lock_ids_differ_by_slot():
    first = LockDataId.record(3, Rid(2, 5))
    second = LockDataId.record(3, Rid(2, 6))
    assert first != second
    assert first.get() != second.get()


def test_lock_ids_equal_and_hash_alike():
    first = LockDataId.record(4, Rid(1, 1))
    second = LockDataId.record(4, Rid(1, 1))
    assert first == second
    assert len({first, second}) == 1


def test_table_and_record_ids_are_distinct():
    assert LockDataId.table(4) != LockDataId.record(4, Rid(-1, -1))


def test_table_lock_rejects_rid():
    with pytest.raises(ValueError):
        LockDataId(1, LockDataType.TABLE, Rid(0, 0))


def test_write_record_for_insert_has_no_record():
    write = WriteRecord(WType.INSERT_TUPLE, "t", Rid(1, 2))
    assert write.record is None
    assert write.tab_name == "t"
    assert write.rid == Rid(1, 2)


def test_write_record_for_update_keeps_old_bytes():
    write = WriteRecord(WType.UPDATE_TUPLE, "t", Rid(1, 2), b"\x01\x02")
    assert write.record == b"\x01\x02"
    assert write.wtype is WType.UPDATE_TUPLE


@pytest.mark.parametrize(
    ("reason", "expected"),
    [
        (
            AbortReason.LOCK_ON_SHIRINKING,
            "Transaction 9 aborted because it cannot request locks on SHRINKING phase\n",
        ),
        (
            AbortReason.UPGRADE_CONFLICT,
            "Transaction 9 aborted because another transaction is waiting for upgrading\n",
        ),
        (AbortReason.DEADLOCK_PREVENTION, "Transaction 9 aborted for deadlock prevention\n"),
    ],
)
def test_abort_info(reason, expected):
    exc = TransactionAbortException(9, reason)
    assert exc.info() == expected
    assert exc.txn_id == 9
    assert exc.abort_reason is reason


def test_abort_exception_message_matches_info():
    exc = TransactionAbortException(2, AbortReason.DEADLOCK_PREVENTION)
    assert str(exc) == exc.info() == "Transaction 2 aborted for deadlock prevention\n"
    with pytest.raises(TransactionAbortException) as info:
        raise exc
    assert info.value.txn_id == 2
    assert info.value.abort_reason is AbortReason.DEADLOCK_PREVENTION