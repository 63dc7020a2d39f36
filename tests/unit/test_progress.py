import io
import unittest

from audit_hdd.progress import StatusLine


class TestStatusLine(unittest.TestCase):
    def test_disabled_writes_nothing(self):
        out = io.StringIO()
        status = StatusLine(file=out, enabled=False)
        status.update("1: /hd/a.txt")
        status.clear()
        status.close()
        self.assertEqual(out.getvalue(), "")
        self.assertFalse(status.enabled)

    def test_not_a_terminal_disables_by_default(self):
        self.assertFalse(StatusLine(file=io.StringIO()).enabled)

    def test_enabled_draws_message(self):
        out = io.StringIO()
        with StatusLine(file=out, enabled=True) as status:
            status.update("42: /hd/Song.sd2")
            self.assertIn("42: /hd/Song.sd2", out.getvalue())
            status.clear()
        self.assertFalse(status.enabled)


if __name__ == '__main__':
    unittest.main()
