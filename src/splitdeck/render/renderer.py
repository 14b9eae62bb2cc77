"""Layout preview renderer using Rich library."""

from rich.console import Console
from rich.style import Style
from rich.text import Text

from splitdeck.core.ids import short_id
from splitdeck.layout import LayoutNode

from .geometry import compute_geometry
from .types import PaneRect

# pane 边框颜色轮换
PANE_COLORS = ["blue", "green", "magenta", "yellow", "cyan", "red"]

VACANT_STYLE = Style(color="bright_black", dim=True)
VACANT_LABEL = "(empty)"


class LayoutRenderer:
    """将 layout 树渲染为字符画预览（纯文本 / Rich Text / SVG）。"""

    def __init__(self, width: int = 80, height: int = 24):
        """
        初始化渲染器。

        Args:
            width: 预览宽度（字符数）
            height: 预览高度（行数）
        """
        self.width = width
        self.height = height

    def render(self, layout: LayoutNode, labels: dict[str, str] | None = None) -> Text:
        """
        渲染为 Rich Text。

        Args:
            layout: layout 树
            labels: session_id -> 显示名，缺省时显示短 ID

        Returns:
            每个 pane 一个边框、居中显示标签的 Text
        """
        labels = labels or {}
        chars = [[" "] * self.width for _ in range(self.height)]
        styles: list[list[Style | None]] = [[None] * self.width for _ in range(self.height)]

        geometry = compute_geometry(layout, self.width, self.height, integral=True)
        for index, pane in enumerate(geometry.panes):
            if pane.session_id is None:
                style = VACANT_STYLE
                label = VACANT_LABEL
            else:
                style = Style(color=PANE_COLORS[index % len(PANE_COLORS)])
                label = labels.get(pane.session_id, short_id(pane.session_id))
            self._draw_pane(chars, styles, pane, label, style)

        text = Text()
        for row_chars, row_styles in zip(chars, styles):
            for char, style in zip(row_chars, row_styles):
                text.append(char, style=style)
            text.append("\n")
        return text

    def render_plain(self, layout: LayoutNode, labels: dict[str, str] | None = None) -> str:
        """渲染为不带样式的字符串"""
        return self.render(layout, labels).plain

    def render_svg(self, layout: LayoutNode, labels: dict[str, str] | None = None) -> str:
        """渲染为 SVG 字符串"""
        console = Console(
            record=True,
            width=self.width,
            height=self.height,
            force_terminal=True,
            color_system="truecolor",
        )
        console.print(self.render(layout, labels), end="")
        return console.export_svg(title="")

    def _draw_pane(
        self,
        chars: list[list[str]],
        styles: list[list[Style | None]],
        pane: PaneRect,
        label: str,
        style: Style,
    ) -> None:
        x, y = int(pane.x), int(pane.y)
        w, h = int(pane.width), int(pane.height)
        # 太小的 pane 画不出边框
        if w < 2 or h < 2:
            return

        right, bottom = x + w - 1, y + h - 1

        def put(col: int, row: int, char: str) -> None:
            chars[row][col] = char
            styles[row][col] = style

        for col in range(x + 1, right):
            put(col, y, "─")
            put(col, bottom, "─")
        for row in range(y + 1, bottom):
            put(x, row, "│")
            put(right, row, "│")
        put(x, y, "┌")
        put(right, y, "┐")
        put(x, bottom, "└")
        put(right, bottom, "┘")

        inner = w - 2
        if inner <= 0 or h < 3:
            return
        label = label[:inner]
        row = y + h // 2
        start = x + 1 + (inner - len(label)) // 2
        for offset, char in enumerate(label):
            put(start + offset, row, char)
