"""
Declarative layouts.

Builds container trees from nested dictionaries, usually loaded from
YAML files:

    keys:
      next: tab
      previous: shift+tab
      group_next:
        ctrl+n: [1]
    root:
      id: main
      border: light
      title: Dashboard
      split:
        direction: vertical
        fixed: 30
        first:
          id: sidebar
          widget: tree
          focus: {groups: [1]}
        second:
          widget: editor
          margin: {top: 1, left: "10%"}
          focus: {focused: true}

Widgets are referenced by name and looked up in a mapping supplied by the
application. Without a mapping the names themselves are placed as
widgets, which is enough to validate and resolve a layout.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from termdeck.config.settings import get_layouts_dir
from termdeck.exceptions import ConfigurationError

from termdeck.container import Container, options as o
from termdeck.container.options import Option, SplitOption
from termdeck.container.types import HorizontalAlign, LineStyle, Side, VerticalAlign

logger = logging.getLogger(__name__)

NODE_KEYS = {
    "id",
    "widget",
    "split",
    "margin",
    "padding",
    "align",
    "border",
    "title",
    "title_align",
    "border_color",
    "focused_color",
    "title_color",
    "title_focused_color",
    "focus",
    "keys",
}
SPLIT_KEYS = {"direction", "percent", "percent_from_end", "fixed", "fixed_from_end", "first", "second"}
DOCUMENT_KEYS = {"root", "keys", "name", "description"}
SIZING_KEYS = ("percent", "percent_from_end", "fixed", "fixed_from_end")

_TITLE_ALIGN = {
    "left": o.border_title_align_left,
    "center": o.border_title_align_center,
    "right": o.border_title_align_right,
}


def _require_mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{where} must be a mapping", value=value)
    return value


def _check_keys(data: Mapping[str, Any], allowed: set, where: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigurationError(f"unknown keys in {where}: {', '.join(unknown)}")


def _int_value(value: Any, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{where} must be an integer", value=value)
    return value


def _groups_value(value: Any, where: str) -> List[int]:
    """Focus groups given as a single integer or a list of integers."""
    if isinstance(value, list):
        return [_int_value(group, where) for group in value]
    return [_int_value(value, where)]


def parse_spacing_value(value: Union[int, str]) -> Tuple[int, bool]:
    """Parse a margin or padding value.

    Returns:
        (amount, is_percent)

    Examples:
        >>> parse_spacing_value(2)
        (2, False)
        >>> parse_spacing_value("10%")
        (10, True)
    """
    if isinstance(value, bool):
        raise ConfigurationError("invalid spacing value", value=value)
    if isinstance(value, int):
        return value, False
    if isinstance(value, str):
        text = value.strip()
        is_percent = text.endswith("%")
        if is_percent:
            text = text[:-1].strip()
        try:
            return int(text), is_percent
        except ValueError:
            pass
    raise ConfigurationError("invalid spacing value, expected cells or a percentage", value=value)


def _spacing_options(kind: str, data: Any) -> List[Option]:
    data = _require_mapping(data, kind)
    _check_keys(data, {s.value for s in Side}, kind)
    result: List[Option] = []
    for side in Side:
        if side.value not in data:
            continue
        amount, is_percent = parse_spacing_value(data[side.value])
        if is_percent:
            result.append(o.SpacingPercent(kind, side, amount))
        else:
            result.append(o.SpacingCells(kind, side, amount))
    return result


def _enum_value(enum_cls: Any, value: Any, where: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as e:
        valid = ", ".join(m.value for m in enum_cls)
        raise ConfigurationError(f"invalid {where} {value!r}, must be one of: {valid}") from e


def _resolve_widget(name: Any, widgets: Optional[Mapping[str, Any]]) -> Any:
    if widgets is None:
        return name
    if name not in widgets:
        raise ConfigurationError("unknown widget in layout", widget=name)
    return widgets[name]


def key_options(data: Any) -> List[Option]:
    """Options for the tree-wide focus keys."""
    data = _require_mapping(data, "keys")
    _check_keys(data, {"next", "previous", "group_next", "group_previous"}, "keys")
    result: List[Option] = []
    if "next" in data:
        result.append(o.key_focus_next(str(data["next"])))
    if "previous" in data:
        result.append(o.key_focus_previous(str(data["previous"])))
    for name, factory in (
        ("group_next", o.key_focus_groups_next),
        ("group_previous", o.key_focus_groups_previous),
    ):
        for key, groups in _require_mapping(data.get(name, {}), f"keys.{name}").items():
            groups = _groups_value(groups, f"keys.{name}.{key}")
            result.append(factory(str(key), *groups))
    return result


def _split_option(data: Mapping[str, Any], widgets: Optional[Mapping[str, Any]]) -> Option:
    data = _require_mapping(data, "split")
    _check_keys(data, SPLIT_KEYS, "split")

    direction = data.get("direction", "vertical")
    sizing: List[SplitOption] = []
    factories = {
        "percent": o.split_percent,
        "percent_from_end": o.split_percent_from_end,
        "fixed": o.split_fixed,
        "fixed_from_end": o.split_fixed_from_end,
    }
    for key in SIZING_KEYS:
        if key in data:
            sizing.append(factories[key](_int_value(data[key], f"split.{key}")))

    first = options_from_dict(data.get("first") or {}, widgets)
    second = options_from_dict(data.get("second") or {}, widgets)

    if direction == "vertical":
        return o.split_vertical(o.left(*first), o.right(*second), *sizing)
    if direction == "horizontal":
        return o.split_horizontal(o.top(*first), o.bottom(*second), *sizing)
    raise ConfigurationError(
        "invalid split direction, must be vertical or horizontal", direction=direction
    )


def options_from_dict(
    data: Mapping[str, Any], widgets: Optional[Mapping[str, Any]] = None
) -> List[Option]:
    """Translate one layout node into container options.

    Args:
        data: The node description
        widgets: Widget instances by name, None to place the names themselves

    Returns:
        Options in the order they should be applied
    """
    data = _require_mapping(data, "layout node")
    _check_keys(data, NODE_KEYS, "layout node")
    if "widget" in data and "split" in data:
        raise ConfigurationError(
            "a layout node can hold a widget or a split, not both", container_id=data.get("id")
        )

    result: List[Option] = []
    if "id" in data:
        result.append(o.id_(str(data["id"])))
    if "keys" in data:
        result.extend(key_options(data["keys"]))

    if "border" in data:
        result.append(o.border(_enum_value(LineStyle, data["border"], "border")))
    if "title" in data:
        result.append(o.border_title(str(data["title"])))
    if "title_align" in data:
        align = data["title_align"]
        if align not in _TITLE_ALIGN:
            raise ConfigurationError("invalid title_align, must be left, center or right", value=align)
        result.append(_TITLE_ALIGN[align]())

    # Colors first so sub containers created by the split inherit them.
    for name in ("border_color", "focused_color", "title_color", "title_focused_color"):
        if name in data:
            result.append(getattr(o, name)(str(data[name])))

    if "align" in data:
        align = _require_mapping(data["align"], "align")
        _check_keys(align, {"horizontal", "vertical"}, "align")
        if "horizontal" in align:
            result.append(o.align_horizontal(_enum_value(HorizontalAlign, align["horizontal"], "alignment")))
        if "vertical" in align:
            result.append(o.align_vertical(_enum_value(VerticalAlign, align["vertical"], "alignment")))

    if "margin" in data:
        result.extend(_spacing_options("margin", data["margin"]))
    if "padding" in data:
        result.extend(_spacing_options("padding", data["padding"]))

    focus = _require_mapping(data.get("focus", {}), "focus")
    _check_keys(focus, {"skip", "groups", "focused"}, "focus")
    if focus.get("skip"):
        result.append(o.key_focus_skip())
    if "groups" in focus:
        result.append(o.key_focus_groups(*_groups_value(focus["groups"], "focus.groups")))

    if "widget" in data:
        result.append(o.place_widget(_resolve_widget(data["widget"], widgets)))
    elif "split" in data:
        result.append(_split_option(data["split"], widgets))

    # After the split, a focused parent overrides its focused sub containers.
    if focus.get("focused"):
        result.append(o.focused())
    return result


def build_layout(
    data: Mapping[str, Any], widgets: Optional[Mapping[str, Any]] = None
) -> Container:
    """Build and validate a container tree from a layout document.

    The document either has a ``root`` node (and optionally ``keys``) or
    is the root node itself. ``name`` and ``description`` are ignored.
    """
    data = _require_mapping(data, "layout")
    if "root" in data:
        _check_keys(data, DOCUMENT_KEYS, "layout")
        options = key_options(data.get("keys", {})) + options_from_dict(data["root"], widgets)
    else:
        node = {k: v for k, v in data.items() if k not in ("name", "description")}
        options = options_from_dict(node, widgets)
    return Container.new(*options)


class LayoutLoader:
    """Loads layout documents from YAML files.

    Layouts are looked up by name in the layouts directory
    (``<layouts_dir>/<name>.yaml``) or by path. A file may contain several
    layouts under a top-level ``layouts:`` mapping.
    """

    def __init__(self, layouts_dir: Optional[Path] = None) -> None:
        self.layouts_dir = layouts_dir or get_layouts_dir()
        self._cache: Dict[str, Dict[str, Any]] = {}

    def find(self, name: str) -> Optional[Path]:
        """Find the file of a layout given by path or by name."""
        candidate = Path(name).expanduser()
        if candidate.suffix in (".yaml", ".yml") and candidate.exists():
            return candidate
        for suffix in (".yaml", ".yml"):
            path = self.layouts_dir / f"{name}{suffix}"
            if path.exists():
                return path
        return None

    def load(self, name: str) -> Dict[str, Any]:
        """Load a layout document.

        Raises:
            FileNotFoundError: If no layout file is found
            ConfigurationError: If the file is not a valid layout document
        """
        if name in self._cache:
            return self._cache[name]

        path = self.find(name)
        if path is None:
            raise FileNotFoundError(f"Layout not found: {name}")

        import yaml

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError("invalid YAML in layout file", path=str(path)) from e

        if not data:
            raise ConfigurationError("empty layout file", path=str(path))
        data = dict(_require_mapping(data, f"layout file {path}"))

        if "layouts" in data:
            layouts = _require_mapping(data["layouts"], "layouts")
            layout_name = Path(name).stem if name not in layouts else name
            if layout_name not in layouts:
                raise ConfigurationError(f"layout {layout_name!r} not found", path=str(path))
            data = dict(_require_mapping(layouts[layout_name], f"layout {layout_name!r}"))

        logger.info("Loaded layout %r from %s", name, path)
        self._cache[name] = data
        return data

    def build(self, name: str, widgets: Optional[Mapping[str, Any]] = None) -> Container:
        """Load a layout and build its container tree."""
        return build_layout(self.load(name), widgets)

    def list_layouts(self) -> List[str]:
        """Names of the layouts available in the layouts directory."""
        if not self.layouts_dir.exists():
            return []
        names = {p.stem for pattern in ("*.yaml", "*.yml") for p in self.layouts_dir.glob(pattern)}
        return sorted(names)

    def clear_cache(self) -> None:
        self._cache.clear()
