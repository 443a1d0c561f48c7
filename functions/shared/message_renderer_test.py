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

from shared import message_renderer


class RenderMessageTest(unittest.TestCase):
    def test_image_url_renders_image(self):
        html = message_renderer.render_message("  https://cdn.example.com/cat.PNG  ")
        self.assertEqual(
            html,
            '<img src="https://cdn.example.com/cat.PNG" alt="Message content">',
        )

    def test_image_url_with_text_renders_as_markdown(self):
        html = message_renderer.render_message("look https://cdn.example.com/cat.png")
        self.assertNotIn("<img", html)
        self.assertIn('href="https://cdn.example.com/cat.png"', html)

    def test_renders_basic_markdown(self):
        html = message_renderer.render_message("# Title\n\n**bold** and *em*\n\n- one\n- two")
        self.assertIn("<h1>Title</h1>", html)
        self.assertIn("<strong>bold</strong>", html)
        self.assertIn("<em>em</em>", html)
        self.assertIn("<li>one</li>", html)

    def test_fenced_code_keeps_language_class(self):
        html = message_renderer.render_message("```python\nprint('hi')\n```")
        self.assertIn('<code class="language-python">', html)
        self.assertIn("<pre>", html)

    def test_tables(self):
        html = message_renderer.render_message("| a | b |\n|---|---|\n| 1 | 2 |")
        self.assertIn("<table>", html)
        self.assertIn("<td>1</td>", html)

    def test_links_open_in_new_tab(self):
        html = message_renderer.render_message("[docs](https://example.com/docs)")
        self.assertIn('href="https://example.com/docs"', html)
        self.assertIn('target="_blank"', html)
        self.assertIn('rel="noopener noreferrer"', html)

    def test_strips_dangerous_html(self):
        html = message_renderer.render_message(
            '<script>alert(1)</script><img src=x onerror="alert(2)">'
            '<div onclick="steal()">text</div>'
        )
        self.assertNotIn("<script", html)
        self.assertNotIn("onerror", html)
        self.assertNotIn("onclick", html)
        self.assertNotIn("<div", html)

    def test_drops_javascript_links(self):
        html = message_renderer.render_message("[click](javascript:alert(1))")
        self.assertNotIn("javascript:", html)

    def test_empty_content(self):
        self.assertEqual(message_renderer.render_message(""), "")
        self.assertEqual(message_renderer.render_message(None), "")


if __name__ == "__main__":
    unittest.main()
