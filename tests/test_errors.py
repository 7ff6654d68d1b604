"""
Errors Module Tests
===================
"""

import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
import unittest
from target_locator import TargetConfigError, TargetLocatorError
from target_locator.utils.errors import tested


class TestErrors(unittest.TestCase):
    def test_hierarchy(self):
        with self.assertRaises(TargetLocatorError) as cm:
            raise TargetConfigError("LocatorConfig.load: bad file")

        self.assertEqual(str(cm.exception), "LocatorConfig.load: bad file")
        self.assertIsInstance(cm.exception, Exception)

    def test_tested_marker(self):
        @tested
        def marked():
            return 1

        self.assertTrue(marked.tested)
        self.assertEqual(marked(), 1)
        self.assertTrue(TargetConfigError.__init__.tested)


if __name__ == "__main__":
    unittest.main()
