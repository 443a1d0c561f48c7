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

"""
Renders chat message content to sanitized HTML.

Messages are either a bare image URL, which becomes a single image, or
markdown. Markdown output is passed through an allowlist so raw HTML in a
message can never reach the page unsanitized.
"""

import html
import re

import bleach
import markdown

IMAGE_URL_PATTERN = re.compile(
    r"^https?://[^\s]+\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE
)
_CODE_LANGUAGE_CLASS = re.compile(r"^language-\w+$")

MARKDOWN_EXTENSIONS = ["extra", "sane_lists"]

ALLOWED_TAGS = frozenset(
    {
        "a",
        "blockquote",
        "br",
        "code",
        "del",
        "em",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "hr",
        "li",
        "ol",
        "p",
        "pre",
        "strong",
        "table",
        "tbody",
        "td",
        "th",
        "thead",
        "tr",
        "ul",
    }
)
ALLOWED_PROTOCOLS = frozenset({"http", "https", "mailto"})


def _allow_code_class(tag: str, name: str, value: str) -> bool:
    return name == "class" and bool(_CODE_LANGUAGE_CLASS.match(value))


ALLOWED_ATTRIBUTES = {
    "a": ["href", "title"],
    "code": _allow_code_class,
}


def _open_in_new_tab(attrs, new=False):
    attrs[(None, "target")] = "_blank"
    attrs[(None, "rel")] = "noopener noreferrer"
    return attrs


def is_image_url(content: str) -> bool:
    return bool(IMAGE_URL_PATTERN.match(content.strip()))


def render_image(url: str) -> str:
    return f'<img src="{html.escape(url.strip(), quote=True)}" alt="Message content">'


def render_markdown(content: str) -> str:
    """Renders markdown and keeps only allowlisted tags and attributes."""
    md_html = markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS)
    cleaned = bleach.clean(
        md_html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )
    return bleach.linkify(
        cleaned, callbacks=[_open_in_new_tab], skip_tags={"pre", "code"}
    )


def render_message(content: str) -> str:
    if not content or not isinstance(content, str):
        return ""
    if is_image_url(content):
        return render_image(content)
    return render_markdown(content)
