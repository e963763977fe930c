"""Code region scanner for post bodies.

Finds Markdown fenced regions (``` and ~~~) and Liquid
``{% highlight %}`` regions, together with their language hints. The
regions are never interpreted; the hint only selects a lexer at render time.
"""

import re
from dataclasses import dataclass
from typing import Optional

FENCE_OPEN_RE = re.compile(r"^(?P<indent> {0,3})(?P<fence>`{3,}|~{3,})[ \t]*(?P<info>.*?)[ \t]*$")
LIQUID_OPEN_RE = re.compile(
    r"^\s*\{%-?\s*highlight\s+(?P<lang>[\w+#.-]+)(?P<options>[^%]*?)\s*-?%\}\s*$"
)
LIQUID_CLOSE_RE = re.compile(r"^\s*\{%-?\s*endhighlight\s*-?%\}\s*$")
BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass
class CodeBlock:
    """A code region inside a post body."""

    language: Optional[str]  # Display hint, e.g. "swift"; None when absent
    code: str
    start_line: int  # Line of the opening fence
    end_line: Optional[int]  # Line of the closing fence, None if never closed
    style: str = "fence"  # "fence" or "liquid"

    @property
    def closed(self) -> bool:
        return self.end_line is not None


def _language_from_info(info: str) -> Optional[str]:
    """Take the first word of a fence info string as the language hint."""
    if not info:
        return None
    word = info.split()[0].strip("{}.")
    return word or None


def _match_fence_open(line: str) -> Optional[re.Match]:
    """Match an opening fence; a backtick fence may not have backticks in its info string."""
    match = FENCE_OPEN_RE.match(line.rstrip("\r\n"))
    if match and match.group("fence")[0] == "`" and "`" in match.group("info"):
        return None
    return match


def _is_fence_close(line: str, fence: str) -> bool:
    stripped = line.rstrip("\r\n")
    if len(stripped) - len(stripped.lstrip(" ")) > 3:
        return False
    stripped = stripped.strip()
    if not stripped:
        return False
    char = fence[0]
    return set(stripped) == {char} and len(stripped) >= len(fence)


def scan_code_blocks(body: str, first_line: int = 1) -> list[CodeBlock]:
    """
    Scan body text for code regions.

    Args:
        body: Body text of a post.
        first_line: Line number of the body's first line in the source file.

    Returns:
        Code regions in document order. An unclosed region runs to the end
        of the body and has ``end_line`` set to None.
    """
    blocks: list[CodeBlock] = []
    lines = body.splitlines()
    index = 0

    while index < len(lines):
        line = lines[index]
        line_no = first_line + index

        fence_match = _match_fence_open(line)
        if fence_match:
            fence = fence_match.group("fence")
            language = _language_from_info(fence_match.group("info"))
            code_lines: list[str] = []
            end_line = None
            index += 1
            while index < len(lines):
                if _is_fence_close(lines[index], fence):
                    end_line = first_line + index
                    break
                code_lines.append(lines[index])
                index += 1
            blocks.append(
                CodeBlock(
                    language=language,
                    code="\n".join(code_lines),
                    start_line=line_no,
                    end_line=end_line,
                    style="fence",
                )
            )
            index += 1
            continue

        liquid_match = LIQUID_OPEN_RE.match(line)
        if liquid_match:
            code_lines = []
            end_line = None
            index += 1
            while index < len(lines):
                if LIQUID_CLOSE_RE.match(lines[index]):
                    end_line = first_line + index
                    break
                code_lines.append(lines[index])
                index += 1
            blocks.append(
                CodeBlock(
                    language=liquid_match.group("lang"),
                    code="\n".join(code_lines),
                    start_line=line_no,
                    end_line=end_line,
                    style="liquid",
                )
            )
            index += 1
            continue

        index += 1

    return blocks


def find_unclosed(body: str, first_line: int = 1) -> list[CodeBlock]:
    """Return only the code regions that are never closed."""
    return [block for block in scan_code_blocks(body, first_line) if not block.closed]


def _fence_for(code_lines: list[str]) -> str:
    """Pick a backtick fence longer than any backtick run in the code."""
    runs = [len(run) for line in code_lines for run in BACKTICK_RUN_RE.findall(line)]
    longest = max(runs, default=0)
    return "`" * max(3, longest + 1)


def liquid_to_fences(body: str) -> str:
    """
    Rewrite Liquid highlight regions as Markdown fences.

    Regions already inside a Markdown fence are left untouched so that
    posts showing Liquid syntax as an example keep it verbatim. The fence
    written for a region is longer than any backtick run inside it, so
    fenced samples within the region stay part of the code.
    """
    lines = body.splitlines(keepends=True)
    out: list[str] = []
    open_fence: Optional[str] = None
    liquid_open: Optional[re.Match] = None
    liquid_newline = ""
    region: list[str] = []

    for line in lines:
        newline = "\n" if line.endswith("\n") else ""
        if open_fence is not None:
            out.append(line)
            if _is_fence_close(line, open_fence):
                open_fence = None
            continue

        if liquid_open is not None:
            if LIQUID_CLOSE_RE.match(line):
                fence = _fence_for(region)
                out.append(f"{fence}{liquid_open.group('lang')}{liquid_newline}")
                out.extend(region)
                out.append(fence + newline)
                liquid_open = None
                region = []
            else:
                region.append(line)
            continue

        fence_match = _match_fence_open(line)
        if fence_match:
            open_fence = fence_match.group("fence")
            out.append(line)
            continue

        liquid_match = LIQUID_OPEN_RE.match(line)
        if liquid_match:
            liquid_open = liquid_match
            liquid_newline = newline
            continue

        out.append(line)

    if liquid_open is not None:
        # Never closed: the fence runs to the end of the body
        out.append(f"{_fence_for(region)}{liquid_open.group('lang')}{liquid_newline}")
        out.extend(region)

    return "".join(out)
