"""
W3C Web Annotation selectors.

This module provides the selector value objects (TextQuoteSelector,
TextPositionSelector, RangeSelector), reading them from annotation data, and
the summary of a resolution attempt (MatchResult).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Any, Literal, Self, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic import computed_field, model_validator

from textanchor.config import SUPPORTED_SELECTOR_TYPES, validate_offsets
from textanchor.errors import UnsupportedSelectorError

if TYPE_CHECKING:
    from textanchor.segmented.document import TextRange


class MatchStatus(str, Enum):
    """Status of a selector match attempt."""

    FOUND = "found"
    ORPHANED = "orphaned"
    AMBIGUOUS = "ambiguous"


class MatchResult(BaseModel):
    """
    Result of locating a selector in a scope.

    Use the boolean properties for clean result handling:

        result = await selector.locate(scope)
        if result.found:
            print(result.match.text)
        elif result.ambiguous:
            print(f"Found {len(result.matches)} matches")
        elif result.orphaned:
            print("Not found")

    The model is completed once TextRange exists; see
    textanchor.segmented.document.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status: MatchStatus
    matches: list[TextRange] = []

    @classmethod
    def from_matches(cls, matches: list[TextRange]) -> MatchResult:
        if not matches:
            return cls(status=MatchStatus.ORPHANED)
        if len(matches) == 1:
            return cls(status=MatchStatus.FOUND, matches=matches)
        return cls(status=MatchStatus.AMBIGUOUS, matches=matches)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def found(self) -> bool:
        """True if exactly one match was found."""
        return self.status == MatchStatus.FOUND

    @computed_field  # type: ignore[prop-decorator]
    @property
    def orphaned(self) -> bool:
        """True if no match was found."""
        return self.status == MatchStatus.ORPHANED

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ambiguous(self) -> bool:
        """True if multiple matches were found."""
        return self.status == MatchStatus.AMBIGUOUS

    @property
    def match(self) -> TextRange | None:
        """The first match (the only one when found=True)."""
        return self.matches[0] if self.matches else None


class BaseSelector(BaseModel):
    """
    Fields shared by all selectors.

    Selectors are immutable values: two selectors with the same fields are
    equal and hash alike. Field names are snake_case in Python; the camelCase
    names of the Web Annotation model are accepted and produced as aliases.

    Attributes:
        refined_by: Optional selector applied within each match of this one
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    refined_by: Selector | None = Field(default=None, alias="refinedBy")

    @classmethod
    def from_annotation(cls, yaml_text: str) -> Self:
        """
        Load a selector from W3C Web Annotation YAML.

        Parses target.selector from an annotation body. If the annotation
        lists several selectors, the first one of this class is used.

        Example:
            selector = TextQuoteSelector.from_annotation('''
                target:
                  selector:
                    type: TextQuoteSelector
                    exact: "yada"
                    suffix: " yada"
            ''')

        Raises:
            UnsupportedSelectorError: If there is no selector of this class
        """
        for selector in selectors_from_annotation(yaml_text):
            if isinstance(selector, cls):
                return selector
        raise UnsupportedSelectorError(f"Annotation has no {cls.__name__}")

    def to_wire(self) -> dict[str, Any]:
        """Dump as a JSON-compatible dict in the Web Annotation shape."""
        return self.model_dump(by_alias=True, exclude_none=True)

    async def locate(self, scope: TextRange) -> MatchResult:
        """
        Locate this selector within a scope.

        Returns:
            MatchResult with every match, and whether there was exactly one
        """
        from textanchor.segmented.matcher import locate

        return await locate(self, scope)


class TextQuoteSelector(BaseSelector):
    """
    Selects text by quoting it, with optional context around it.

    The prefix and suffix disambiguate when the exact text appears multiple
    times.

    Attributes:
        type: Selector type identifier (always "TextQuoteSelector")
        exact: The exact text to match
        prefix: Text that must appear immediately before the exact match
        suffix: Text that must appear immediately after the exact match
    """

    type: Literal["TextQuoteSelector"] = "TextQuoteSelector"
    exact: str
    prefix: str = ""
    suffix: str = ""


class TextPositionSelector(BaseSelector):
    """
    Selects text by its offsets, counted in code points.

    Attributes:
        type: Selector type identifier (always "TextPositionSelector")
        start: Offset of the first selected character
        end: Offset just after the last selected character
    """

    type: Literal["TextPositionSelector"] = "TextPositionSelector"
    start: int
    end: int

    @model_validator(mode="after")
    def _check_offsets(self) -> Self:
        validate_offsets(self.start, self.end)
        return self


class RangeSelector(BaseSelector):
    """
    Selects the text between the matches of two other selectors.

    Attributes:
        type: Selector type identifier (always "RangeSelector")
        start_selector: Selector whose match ends where the range begins
        end_selector: Selector whose match starts where the range ends
    """

    type: Literal["RangeSelector"] = "RangeSelector"
    start_selector: Selector = Field(alias="startSelector")
    end_selector: Selector = Field(alias="endSelector")


Selector = Annotated[
    Union[TextQuoteSelector, TextPositionSelector, RangeSelector],
    Field(discriminator="type"),
]

for _model in (BaseSelector, TextQuoteSelector, TextPositionSelector, RangeSelector):
    _model.model_rebuild()

_selector_adapter: TypeAdapter[Selector] = TypeAdapter(Selector)


def parse_selector(data: Mapping[str, Any] | BaseSelector) -> Selector:
    """
    Read a selector from JSON-compatible data.

    Args:
        data: A mapping in the Web Annotation shape (or a selector, returned as-is)

    Raises:
        UnsupportedSelectorError: If the selector, or one nested in it, has an
            unknown or missing type
        ValidationError: If the fields of a known selector type are invalid
    """
    if isinstance(data, BaseSelector):
        return data
    if not isinstance(data, Mapping):
        raise UnsupportedSelectorError(f"Expected a selector mapping, got {type(data)}")

    selector_type = data.get("type")
    if selector_type not in SUPPORTED_SELECTOR_TYPES:
        raise UnsupportedSelectorError(f"Unsupported selector type: {selector_type}")

    try:
        return _selector_adapter.validate_python(data)
    except ValidationError as e:
        if any(err["type"].startswith("union_tag") for err in e.errors()):
            raise UnsupportedSelectorError(
                f"Unsupported nested selector type in {selector_type}"
            ) from e
        raise


def selectors_from_annotation(yaml_text: str) -> list[Selector]:
    """
    Load the selectors of a W3C Web Annotation written as YAML (or JSON).

    target.selector may hold a single selector or a list of them. Selectors
    of unsupported types are skipped.
    """
    data = yaml.safe_load(yaml_text) or {}
    target = data.get("target", {}) if isinstance(data, Mapping) else {}
    selector_data = target.get("selector", []) if isinstance(target, Mapping) else []
    if isinstance(selector_data, Mapping):
        selector_data = [selector_data]

    selectors: list[Selector] = []
    for item in selector_data:
        try:
            selectors.append(parse_selector(item))
        except UnsupportedSelectorError:
            continue
    return selectors
