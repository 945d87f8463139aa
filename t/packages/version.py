#!/usr/bin/env python3
import operator
import os
import re
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'lib'))

from AptVersions.Packages.Version import PackageVersion, is_canonical, normalize_version


class TestNormalizeVersion(unittest.TestCase):

    TESTS = {
        # plain
        '1.2.3': '1.2.3',
        '2.4.2': '2.4.2',
        '7': '7.0.0',
        # epoch
        '2:1.2.3': '1.2.3',
        '24:1.2': '1.2.0',
        '1:2.38.1-5+deb12u3': '2.38.1',
        '1:9.6p1-3ubuntu13.8': '9.6.0',
        '1:2:3.4': '2.4.0',
        # revision and build suffixes
        '1.2.3-1~ubuntu1': '1.2.3',
        '1.2-1ubuntu1+foo': '1.2.0',
        '25.2.35+ubuntu1': '25.2.35',
        '13.3.0-6ubuntu2~24.04': '13.3.0',
        '18.10.20180917~bzr492+repack1-3.1ubuntu5': '18.10.20180917',
        '21.0.6+7-1~24.04.1': '21.0.6',
        # text inside segments
        '1.2.3ubuntu1': '1.2.3',
        '25.22ubuntu1': '25.22.0',
        '25.22ubuntu1.44mystring1': '25.22.44',
        '3.137ubuntu1': '3.137.0',
        '20200505dfsg0-2ubuntu6': '20200505.0.0',
        '2.2.3.dfsg.1-5build3': '2.2.3',
        # leading zeros
        '01.2.3': '1.2.3',
        '25.02': '25.2.0',
        '1.005-4build3': '1.5.0',
        '550.144.03-0ubuntu1': '550.144.3',
        '24.004.60-1ubuntu7.1': '24.4.60',
        '0.0.1': '0.0.1',
        '000.00.0': '0.0.0',
        # arity
        '1.2': '1.2.0',
        '25.2.5.1.6': '25.2.5',
        '3.20231019.1ubuntu2.1': '3.20231019.1',
        # degenerate input
        '': '0.0.0',
        'dfsg': '0.0.0',
        'abc.def': '0.0.0',
        '1..2': '1.0.2',
        ':': '0.0.0',
        '-1': '0.0.0',
        '١٢.3': '0.3.0',
    }

    def test_normalize(self):
        for raw, expected in self.TESTS.items():
            with self.subTest(raw=raw):
                self.assertEqual(normalize_version(raw), expected)

    def test_always_canonical(self):
        pattern = re.compile(r'^\d+\.\d+\.\d+$')
        for raw in self.TESTS:
            with self.subTest(raw=raw):
                self.assertRegex(normalize_version(raw), pattern)

    def test_idempotent(self):
        for expected in self.TESTS.values():
            with self.subTest(version=expected):
                self.assertEqual(normalize_version(expected), expected)

    def test_none(self):
        self.assertEqual(normalize_version(None), '0.0.0')


class TestPackageVersion(unittest.TestCase):

    def test_components(self):
        version = PackageVersion.from_string('1:2.38.1-5+deb12u3')
        self.assertEqual(version.major, 2)
        self.assertEqual(version.minor, 38)
        self.assertEqual(version.patch, 1)
        self.assertEqual(version.parts, (2, 38, 1))
        self.assertEqual(str(version), '2.38.1')

    def test_from_string_matches_normalize(self):
        for raw in TestNormalizeVersion.TESTS:
            with self.subTest(raw=raw):
                self.assertEqual(str(PackageVersion.from_string(raw)), normalize_version(raw))

    def test_numeric_ordering(self):
        self.assertLess(PackageVersion(1, 19, 2), PackageVersion(1, 20, 3))
        self.assertLess(PackageVersion(1, 9, 0), PackageVersion(1, 10, 0))
        self.assertGreater(PackageVersion.from_string('550.144.03'), PackageVersion(550, 144, 2))
        self.assertGreaterEqual(PackageVersion(2, 0, 0), PackageVersion(2, 0, 0))
        self.assertLess(PackageVersion(1, 2, 3), PackageVersion.from_string('1.10'))

    def test_threshold(self):
        installed = PackageVersion(1, 2, 3)
        for raw, lower, equal in (('1.2.3', False, True), ('1:1.2.3-4ubuntu1', False, True),
                                  ('1.2.4', True, False), ('1.10', True, False), ('1.2', False, False)):
            threshold = PackageVersion.from_string(raw)
            with self.subTest(threshold=raw):
                self.assertEqual(installed < threshold, lower)
                self.assertEqual(installed <= threshold, lower or equal)
                self.assertEqual(installed > threshold, not (lower or equal))
                self.assertEqual(installed >= threshold, not lower)

    def test_string_operand_rejected(self):
        installed = PackageVersion(1, 2, 3)
        for compare in (operator.lt, operator.le, operator.gt, operator.ge):
            with self.subTest(operator=compare.__name__):
                with self.assertRaises(TypeError):
                    compare(installed, '1.2.3')

    def test_equality_and_hash(self):
        self.assertEqual(PackageVersion.from_string('01.2.3'), PackageVersion(1, 2, 3))
        self.assertEqual(len({PackageVersion(1, 2, 3), PackageVersion.from_string('1.2.3-1')}), 1)
        self.assertNotEqual(PackageVersion(1, 2, 3), '1.2.3')

    def test_parse(self):
        self.assertEqual(PackageVersion.parse('25.2.0'), PackageVersion(25, 2, 0))
        for invalid in ('1.2', '1.2.3.4', '1.2.3-1', 'v1.2.3', ''):
            with self.subTest(version=invalid):
                with self.assertRaises(ValueError):
                    PackageVersion.parse(invalid)

    def test_immutable(self):
        version = PackageVersion(1, 2, 3)
        with self.assertRaises(AttributeError):
            version.major = 4

    def test_negative(self):
        with self.assertRaises(ValueError):
            PackageVersion(1, -2, 3)

    def test_is_canonical(self):
        self.assertTrue(is_canonical('1.2.3'))
        self.assertFalse(is_canonical('1.2'))
        self.assertFalse(is_canonical(None))


if __name__ == '__main__':
    unittest.main(verbosity=2)
