import unittest
from quorum_vault.journal import UndoLog
from quorum_vault.wallet import MultiSigWallet
from quorum_vault.rules import ThresholdRule
from quorum_vault.errors import TransferFailed

class TestUndoLog(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.log = UndoLog()
        self.values = []

    def test_writes_outside_a_call_are_not_recorded(self):
        self.log.record(lambda: self.values.append("undone"))
        self.assertEqual(len(self.log), 0)
        self.assertFalse(self.log.active)

    def test_rollback_runs_newest_first(self):
        mark = self.log.begin()
        self.log.record(lambda: self.values.append(1))
        self.log.record(lambda: self.values.append(2))
        self.log.rollback(mark)

        self.assertEqual(self.values, [2, 1])
        self.assertEqual(len(self.log), 0)
        self.assertFalse(self.log.active)

    def test_nested_commit_kept_until_outer_call_ends(self):
        """Test a committed inner call is still undone by its outer call"""
        outer = self.log.begin()
        self.log.record(lambda: self.values.append("outer"))

        self.log.begin()
        self.log.record(lambda: self.values.append("inner"))
        self.log.commit()
        self.assertEqual(len(self.log), 2)

        self.log.rollback(outer)
        self.assertEqual(self.values, ["inner", "outer"])

    def test_inner_rollback_leaves_outer_writes(self):
        self.log.begin()
        self.log.record(lambda: self.values.append("outer"))

        inner = self.log.begin()
        self.log.record(lambda: self.values.append("inner"))
        self.log.rollback(inner)

        self.assertEqual(self.values, ["inner"])
        self.assertEqual(len(self.log), 1)

        self.log.commit()
        self.assertEqual(len(self.log), 0)


class TestWalletJournal(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures"""
        self.wallet = MultiSigWallet(["alice", "bob", "carol"], 1, threshold_rule=ThresholdRule.EXCEED)

    def test_log_empty_between_calls(self):
        """Test completed calls leave nothing behind to undo"""
        for _ in range(20):
            self.wallet.deposit("funder", 10)
        self.wallet.request_transaction("alice", "dave", 50)
        self.wallet.approve_transaction("alice", 0)
        self.wallet.approve_transaction("bob", 0)

        self.assertEqual(len(self.wallet.engine.journal), 0)
        self.assertTrue(self.wallet.get_transaction(0).executed)

    def test_log_empty_after_failed_call(self):
        self.wallet.deposit("funder", 100)
        self.wallet.request_transaction("alice", "dave", 50)
        self.wallet.approve_transaction("alice", 0)
        self.wallet.gateway.register_hook("dave", lambda recipient, value: False)

        with self.assertRaises(TransferFailed):
            self.wallet.approve_transaction("bob", 0)

        self.assertEqual(len(self.wallet.engine.journal), 0)
        self.assertFalse(self.wallet.engine.journal.active)
        self.assertEqual(self.wallet.get_balance(), 100)

if __name__ == '__main__':
    unittest.main()
