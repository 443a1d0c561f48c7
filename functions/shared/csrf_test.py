# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

import re
import unittest

from shared import csrf
from shared.rate_limit import InMemoryStorage


class CsrfTest(unittest.TestCase):
    def setUp(self):
        self.session = InMemoryStorage()

    def test_generates_64_hex_characters(self):
        token = csrf.generate_csrf_token()
        self.assertRegex(token, re.compile(r"^[0-9a-f]{64}$"))
        self.assertNotEqual(token, csrf.generate_csrf_token())

    def test_store_and_validate(self):
        token = csrf.generate_csrf_token()
        csrf.store_csrf_token(self.session, token)

        self.assertEqual(csrf.get_csrf_token(self.session), token)
        self.assertTrue(csrf.validate_csrf_token(self.session, token))
        self.assertFalse(csrf.validate_csrf_token(self.session, token[:-1] + "x"))

    def test_nothing_stored(self):
        self.assertIsNone(csrf.get_csrf_token(self.session))
        self.assertFalse(csrf.validate_csrf_token(self.session, "anything"))

    def test_non_string_token(self):
        csrf.store_csrf_token(self.session, "abc")
        self.assertFalse(csrf.validate_csrf_token(self.session, None))


if __name__ == "__main__":
    unittest.main()
