# src/fcom/core/template.py
import re
from pathlib import Path
from typing import Mapping, Optional, Tuple

from fcom.errors import ConfigurationError, TemplateReadError

XML_OUTPUT_TEMPLATE = """<file_overview>
Total files: {TOTAL_FILES}
Date generated: {DATE_GENERATED}
Folder Structure:
{FOLDER_TREE}

Files included:
{FILES_INCLUDED}
</file_overview>

{FILE_CONTENTS}"""

XML_FILE_TEMPLATE = """<file path="{FILE_PATH}" lines="{LINES_COUNT}" modified="{MODIFIED_TIME}">
{FILE_CONTENT}
</file>

"""

MARKDOWN_OUTPUT_TEMPLATE = """# File Overview

- **Total files:** {TOTAL_FILES}
- **Date generated:** {DATE_GENERATED}

## Folder Structure

```
{FOLDER_TREE}
```

## Files Included

{FILES_INCLUDED}


## Files Contents

---
{FILE_CONTENTS}"""

MARKDOWN_FILE_TEMPLATE = """### {FILE_NAME}

- **Path:** `{FILE_PATH}`
- **Lines:** {LINES_COUNT}
- **Modified:** {MODIFIED_TIME}

```
{FILE_CONTENT}
```

---

"""

BUILTIN_TEMPLATES = {
    "xml": (XML_OUTPUT_TEMPLATE, XML_FILE_TEMPLATE),
    "markdown": (MARKDOWN_OUTPUT_TEMPLATE, MARKDOWN_FILE_TEMPLATE),
}

_PLACEHOLDER = re.compile(r"\{([A-Za-z_]\w*)\}")


def render(template_text: str, fields: Mapping[str, object]) -> str:
    """
    Replaces every {NAME} token whose NAME is a key of `fields`.

    The template is scanned once, so substituted values are inserted verbatim
    and never expanded again. Unknown tokens are left as they are.
    """
    def _substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name in fields:
            return str(fields[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_substitute, template_text)


class Template:
    def __init__(self, text: str):
        self.text = text

    @classmethod
    def from_string(cls, text: str) -> "Template":
        return cls(text)

    @classmethod
    def from_file(cls, path: Path) -> "Template":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateReadError(f"Unable to read template file '{path}': {e}") from e
        return cls(text)

    def render(self, fields: Mapping[str, object]) -> str:
        return render(self.text, fields)


def resolve_templates(
    mode: str,
    custom_output_template: Optional[Path] = None,
    custom_file_template: Optional[Path] = None,
) -> Tuple[Template, Template]:
    """Returns the (outer, inner) template pair for an output mode."""
    key = mode.lower()
    if key in BUILTIN_TEMPLATES:
        outer, inner = BUILTIN_TEMPLATES[key]
        return Template.from_string(outer), Template.from_string(inner)

    if key == "custom":
        if custom_output_template is None or custom_file_template is None:
            raise ConfigurationError(
                "Custom mode requires both --custom-output-template and --custom-file-template."
            )
        return Template.from_file(custom_output_template), Template.from_file(custom_file_template)

    raise ConfigurationError(f"Invalid mode: {mode}. Choose 'xml', 'markdown', or 'custom'.")
