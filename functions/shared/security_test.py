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

import unittest

from shared import security


class SanitizeInputTest(unittest.TestCase):
    def test_strips_markup_and_control_characters(self):
        self.assertEqual(
            security.sanitize_input("  <b>hello</b>\x00 world\x07  "), "hello world"
        )

    def test_keeps_newlines_and_tabs(self):
        self.assertEqual(security.sanitize_input("a\n\tb"), "a\n\tb")

    def test_escapes_stray_angle_brackets(self):
        self.assertEqual(security.sanitize_input("1 < 2"), "1 &lt; 2")

    def test_non_string_input(self):
        self.assertEqual(security.sanitize_input(None), "")
        self.assertEqual(security.sanitize_input(42), "")

    def test_sanitize_is_idempotent(self):
        samples = [
            "",
            "plain text",
            "  padded  ",
            "<script>alert(1)</script>",
            " <img src=x onerror=alert(1)> tail",
            "<<b>b>nested</b>",
            "a & b &amp; c &lt;d&gt;",
            "café ☃ \U0001f600",
            "\x00\x01<p>\x1fnull bytes</p>\x7f",
            "&amp",
            "line one\nline two\r\n\ttabbed",
            "<a href='javascript:alert(1)'>click</a>",
            "5 > 3 and 2 < 4",
            "<!-- comment -->visible",
        ]
        for sample in samples:
            with self.subTest(sample=sample):
                once = security.sanitize_input(sample)
                self.assertEqual(security.sanitize_input(once), once)


class EscapeHtmlTest(unittest.TestCase):
    def test_removes_tags(self):
        self.assertEqual(security.escape_html("<em>hi</em>"), "hi")

    def test_empty(self):
        self.assertEqual(security.escape_html(""), "")


class ValidatorsTest(unittest.TestCase):
    def test_validate_email(self):
        self.assertTrue(security.validate_email("user.name+tag@example.co.uk"))
        self.assertFalse(security.validate_email("not-an-email"))
        self.assertFalse(security.validate_email("user@-example.com"))
        self.assertFalse(security.validate_email("a@b.com\n"))
        self.assertFalse(security.validate_email(""))

    def test_validate_message_content(self):
        self.assertTrue(security.validate_message_content("hello"))
        self.assertTrue(security.validate_message_content("x" * 5000))
        self.assertFalse(security.validate_message_content("x" * 5001))
        self.assertFalse(security.validate_message_content("   "))
        self.assertFalse(security.validate_message_content("null\0byte"))
        self.assertFalse(security.validate_message_content("y" * 1001 + "\nshort"))
        self.assertTrue(security.validate_message_content("y" * 1000 + "\nshort"))

    def test_validate_conversation_title(self):
        self.assertTrue(security.validate_conversation_title("Réunion d équipe"))
        self.assertTrue(security.validate_conversation_title("Project_notes-v2.1"))
        self.assertFalse(security.validate_conversation_title("Hello!"))
        self.assertFalse(security.validate_conversation_title("a" * 256))
        self.assertFalse(security.validate_conversation_title(""))

    def test_validate_user_id(self):
        self.assertTrue(security.validate_user_id("a" * 28))
        self.assertFalse(security.validate_user_id("a" * 19))
        self.assertFalse(security.validate_user_id("a" * 41))
        self.assertFalse(security.validate_user_id("abc-def-ghi-jkl-mno-pqr"))

    def test_validate_conversation_id(self):
        self.assertTrue(security.validate_conversation_id("conv_123-abc"))
        self.assertFalse(security.validate_conversation_id("conv/123"))
        self.assertFalse(security.validate_conversation_id("c" * 256))


class DetectInjectionAttemptTest(unittest.TestCase):
    def test_flags_suspicious_input(self):
        for text in [
            "1; DROP TABLE users",
            "select * from messages",
            '{"$gt": ""}',
            "<script src=x>",
            "JavaScript:alert(1)",
            "cat file | nc host",
            "../../etc/passwd",
            "..\\windows\\system32",
            "you and me",
        ]:
            with self.subTest(text=text):
                self.assertTrue(security.detect_injection_attempt(text))

    def test_allows_ordinary_text(self):
        for text in ["Hello there", "See you at 5pm.", "Ordering pizza", ""]:
            with self.subTest(text=text):
                self.assertFalse(security.detect_injection_attempt(text))


class SecureRecordsTest(unittest.TestCase):
    USER_ID = "u" * 28

    def test_create_secure_message(self):
        message = security.create_secure_message("conv-1", self.USER_ID, " <i>Hi</i> ")
        self.assertEqual(message.content, "Hi")
        self.assertEqual(message.sanitized_content, "Hi")

    def test_create_secure_message_rejects_invalid_input(self):
        with self.assertLogs("shared.security", level="ERROR"):
            self.assertIsNone(security.create_secure_message("conv/1", self.USER_ID, "Hi"))
        with self.assertLogs("shared.security", level="ERROR"):
            self.assertIsNone(security.create_secure_message("conv-1", "short", "Hi"))
        with self.assertLogs("shared.security", level="ERROR"):
            self.assertIsNone(
                security.create_secure_message("conv-1", self.USER_ID, "rm -rf; ls")
            )

    def test_create_secure_conversation(self):
        conversation = security.create_secure_conversation(self.USER_ID, "Weekly sync")
        self.assertEqual(conversation.title, "Weekly sync")
        with self.assertLogs("shared.security", level="ERROR"):
            self.assertIsNone(
                security.create_secure_conversation(self.USER_ID, "Tom and Jerry")
            )


if __name__ == "__main__":
    unittest.main()
