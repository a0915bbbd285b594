"""
Structural (block-aware) validation.

Validates delimiter placement/nesting for block tags: `else`/`empty`/... must
belong to the current open block, end tags must match it, and every block
must be closed.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

from ..overrides import DEFAULT_BLOCK_SPECS
from ..types import BlockTagSpec
from ..types import Severity
from ..types import TemplateToken
from ..types import TokenStream
from ..types import Violation
from .base import Rule


@dataclass
class _BlockState:
    spec: BlockTagSpec
    start: TemplateToken
    seen: dict[str, int] = field(default_factory=dict)
    terminal_seen: bool = False


class BlockStructure(Rule):
    """
    Enforce basic stack discipline for block delimiters plus a small set of
    ordering constraints:
    - non-repeatable delimiter tags cannot repeat within the same block
    - terminal delimiter tags (e.g. `else`, `empty`) forbid further delimiters
      until the closing end tag
    """

    rule_id = "block_structure"

    def __init__(
        self,
        severity: Severity = Severity.ERROR,
        block_specs: list[BlockTagSpec] | None = None,
    ):
        super().__init__(severity)
        self.block_specs = (
            list(block_specs) if block_specs is not None else DEFAULT_BLOCK_SPECS
        )

    def check(self, stream: TokenStream) -> list[Violation]:
        tags = list(stream.tags())
        start_to_spec, end_tags, middle_tags = self._index_specs(tags)
        violations: list[Violation] = []
        stack: list[_BlockState] = []

        def error(tag: TemplateToken, message: str) -> None:
            violations.append(self.violation(stream, tag, message))

        for tag in tags:
            name = tag.name
            spec = start_to_spec.get(name)
            if spec is not None:
                stack.append(_BlockState(spec=spec, start=tag))
                continue

            if name in middle_tags:
                if not stack:
                    error(tag, f"Unexpected '{name}' outside any block")
                    continue
                entry = stack[-1]
                top_spec = entry.spec
                top_name = entry.start.name

                if name not in top_spec.middle_tags:
                    error(tag, f"Unexpected '{name}' inside '{top_name}' block")
                    continue

                if entry.terminal_seen:
                    # A repeated terminal delimiter is best reported as a duplicate.
                    if (
                        name in top_spec.terminal_middle_tags
                        and entry.seen.get(name, 0) > 0
                    ):
                        error(tag, f"Duplicate '{name}' inside '{top_name}' block")
                        continue
                    error(
                        tag,
                        f"Unexpected '{name}' after terminal delimiter in "
                        f"'{top_name}' block",
                    )
                    continue

                count = entry.seen.get(name, 0)
                if name not in top_spec.repeatable_middle_tags and count > 0:
                    error(tag, f"Duplicate '{name}' inside '{top_name}' block")
                    continue

                entry.seen[name] = count + 1
                if name in top_spec.terminal_middle_tags:
                    entry.terminal_seen = True
                continue

            if name in end_tags:
                if not stack:
                    error(tag, f"Unexpected '{name}' outside any block")
                    continue
                entry = stack[-1]
                top_spec = entry.spec
                top_start = entry.start
                if name not in top_spec.end_tags:
                    error(tag, f"Mismatched '{name}' inside '{top_start.name}' block")
                    continue

                idx = top_spec.end_suffix_from_start_index
                if idx is not None:
                    # `{% block name %}` accepts `{% endblock %}` or
                    # `{% endblock name %}` only.
                    if len(tag.split) > 2:
                        error(tag, f"End tag '{name}' has too many arguments")
                    elif len(tag.split) == 2:
                        expected = (
                            top_start.split[idx] if idx < len(top_start.split) else None
                        )
                        actual = tag.split[1]
                        if expected is None:
                            error(
                                tag,
                                f"End tag '{name}' names '{actual}' but the "
                                f"'{top_start.name}' tag has no name",
                            )
                        elif expected != actual:
                            error(
                                tag,
                                f"End tag '{name}' suffix mismatch "
                                f"(expected '{expected}', got '{actual}')",
                            )
                # Close the current block even on error to avoid cascades.
                stack.pop()
                continue

        for entry in reversed(stack):
            error(entry.start, f"Unclosed '{entry.start.name}' block")

        return violations

    def _index_specs(
        self, tags: list[TemplateToken]
    ) -> tuple[dict[str, BlockTagSpec], set[str], set[str]]:
        start_to_spec: dict[str, BlockTagSpec] = {}
        end_tags: set[str] = set()
        middle_tags: set[str] = set()
        for spec in self.block_specs:
            for start in spec.start_tags:
                start_to_spec[start] = spec
            end_tags.update(spec.end_tags)
            middle_tags.update(spec.middle_tags)

        # Implicit block tags: tags unknown here that follow the `end{tag}`
        # convention (deprecated built-ins like `ifequal`, project-defined
        # blocks). Without them, a generic `{% else %}` would be attributed to
        # an outer known block. Their middle tags are treated as repeatable.
        tag_names = {t.name for t in tags}
        implicit_middle = tuple(sorted(middle_tags))
        for name in sorted(tag_names):
            if name in start_to_spec or name in end_tags or name in middle_tags:
                continue
            end_name = f"end{name}"
            if end_name not in tag_names:
                continue
            start_to_spec[name] = BlockTagSpec(
                start_tags=(name,),
                end_tags=(end_name,),
                middle_tags=implicit_middle,
                repeatable_middle_tags=implicit_middle,
            )
            end_tags.add(end_name)

        return start_to_spec, end_tags, middle_tags
