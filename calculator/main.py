import logging
from enum import Enum, auto
from typing import Callable, Dict, List, Optional

import flet as ft

from calculator.config import LOG_LEVEL, THEMES, TOAST_DURATION_MS, WINDOW_HEIGHT, WINDOW_WIDTH
from calculator.engine import CalculatorEngine, HistoryEntry, Notice, format_number
from calculator.intents import Intent, IntentKind, handle_intent, intent_for_button, intent_for_key

logger = logging.getLogger(__name__)


class ButtonType(Enum):
    DIGIT = auto()
    OPERATOR = auto()
    FUNCTION = auto()


#電卓のボタン
class CalcButton(ft.ElevatedButton):
    def __init__(self, text: str, btn_type: ButtonType, on_click: Callable, expand: int = 1):
        super().__init__()
        self.text = text
        self.btn_type = btn_type
        self.expand = expand
        self.on_click = on_click
        self.data = text
        self.height = 56
        self.style = ft.ButtonStyle(
            padding=ft.padding.all(10),
            shape=ft.RoundedRectangleBorder(radius=8),
        )

    #テーマに合わせて色を設定
    def apply_theme(self, colors: Dict[str, str]) -> None:
        prefix = {
            ButtonType.DIGIT: "digit",
            ButtonType.OPERATOR: "operator",
            ButtonType.FUNCTION: "function",
        }[self.btn_type]
        self.bgcolor = colors[f"{prefix}_bg"]
        self.color = colors[f"{prefix}_fg"]


#計算機のUIコンポーネント
class CalculatorApp(ft.Container):
    def __init__(self):
        super().__init__()
        self.engine = CalculatorEngine(notify=self.show_notice)
        self.theme_name = "light"
        self.buttons: List[CalcButton] = []
        self.setup_ui()
        self.apply_theme()
        self.refresh_display()
        self.render_history()

    def setup_ui(self):
        # ディスプレイの設定
        self.previous_display = ft.Text(value="", size=16, text_align=ft.TextAlign.RIGHT)
        self.current_display = ft.Text(
            value="0",
            size=36,
            weight=ft.FontWeight.BOLD,
            text_align=ft.TextAlign.RIGHT,
        )

        self.theme_button = ft.IconButton(icon=ft.Icons.DARK_MODE, on_click=self.toggle_theme, tooltip="テーマ切替")
        self.history_toggle = ft.IconButton(icon=ft.Icons.HISTORY, on_click=self.toggle_history, tooltip="履歴")

        button_rows = [
            [
                ("AC", ButtonType.FUNCTION, 2),
                ("DEL", ButtonType.FUNCTION, 1),
                ("÷", ButtonType.OPERATOR, 1),
            ],
            [
                ("7", ButtonType.DIGIT, 1),
                ("8", ButtonType.DIGIT, 1),
                ("9", ButtonType.DIGIT, 1),
                ("×", ButtonType.OPERATOR, 1),
            ],
            [
                ("4", ButtonType.DIGIT, 1),
                ("5", ButtonType.DIGIT, 1),
                ("6", ButtonType.DIGIT, 1),
                ("-", ButtonType.OPERATOR, 1),
            ],
            [
                ("1", ButtonType.DIGIT, 1),
                ("2", ButtonType.DIGIT, 1),
                ("3", ButtonType.DIGIT, 1),
                ("+", ButtonType.OPERATOR, 1),
            ],
            [
                ("0", ButtonType.DIGIT, 2),
                (".", ButtonType.DIGIT, 1),
                ("=", ButtonType.OPERATOR, 1),
            ],
        ]

        self.display_box = ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(controls=[self.history_toggle, self.theme_button], alignment=ft.MainAxisAlignment.END),
                    ft.Row(controls=[self.previous_display], alignment=ft.MainAxisAlignment.END),
                    ft.Row(controls=[self.current_display], alignment=ft.MainAxisAlignment.END),
                ],
                spacing=2,
            ),
            margin=ft.margin.only(bottom=15),
            padding=ft.padding.all(10),
        )

        self.keypad = ft.Container(
            content=ft.Column(
                controls=[
                    self.display_box,
                    *[self.create_button_row(row) for row in button_rows],
                ],
                spacing=10,
            ),
            width=340,
            padding=20,
            border_radius=ft.border_radius.all(10),
        )

        # 履歴パネル
        self.history_list = ft.Column(spacing=6, scroll=ft.ScrollMode.AUTO, expand=True)
        self.history_panel = ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            ft.Text("履歴", size=18, weight=ft.FontWeight.BOLD),
                            ft.TextButton("履歴を消去", on_click=self.clear_history_clicked),
                        ],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.Divider(),
                    self.history_list,
                ],
            ),
            width=300,
            height=520,
            padding=20,
            border_radius=ft.border_radius.all(10),
        )

        self.padding = 20
        self.content = ft.Row(
            controls=[self.keypad, self.history_panel],
            vertical_alignment=ft.CrossAxisAlignment.START,
            spacing=20,
        )

    #ボタン行を作成
    def create_button_row(self, button_specs: list) -> ft.Row:
        row = []
        for text, btn_type, expand in button_specs:
            button = CalcButton(text, btn_type, self.button_clicked, expand=expand)
            self.buttons.append(button)
            row.append(button)
        return ft.Row(controls=row, spacing=10)

    #ボタンクリックイベントを処理
    def button_clicked(self, e: ft.ControlEvent) -> None:
        self.dispatch(intent_for_button(e.control.data))

    #キー入力イベントを処理
    def key_pressed(self, e: ft.KeyboardEvent) -> None:
        self.dispatch(intent_for_key(e.key, shift=e.shift))

    #操作をエンジンに渡して表示を更新
    def dispatch(self, intent: Optional[Intent]) -> None:
        if intent is None:
            return
        try:
            history_size = len(self.engine.history)
            handle_intent(self.engine, intent)
            self.refresh_display()
            if intent.kind is IntentKind.CLEAR_HISTORY or len(self.engine.history) != history_size:
                self.render_history()
        except Exception as e:
            logger.exception("Failed to handle %s", intent)
            self.show_message(f"エラー: {str(e)}")
        self.update()

    #ディスプレイを更新
    def refresh_display(self) -> None:
        self.current_display.value = self.engine.current_display
        self.previous_display.value = self.engine.previous_display

    #履歴一覧を描画
    def render_history(self) -> None:
        colors = THEMES[self.theme_name]
        self.history_list.controls.clear()

        if not self.engine.history:
            self.history_list.controls.append(
                ft.Text("まだ履歴がありません", color=colors['display_sub'], italic=True)
            )
            return

        for entry in self.engine.history:
            self.history_list.controls.append(
                ft.Container(
                    content=ft.Column(
                        controls=[
                            ft.Text(f"{entry.expression} =", size=13, color=colors['display_sub']),
                            ft.Text(format_number(entry.result), size=18, weight=ft.FontWeight.BOLD),
                        ],
                        spacing=2,
                        horizontal_alignment=ft.CrossAxisAlignment.END,
                    ),
                    bgcolor=colors['history_item'],
                    border_radius=ft.border_radius.all(6),
                    padding=ft.padding.all(8),
                    on_click=lambda e, entry=entry: self.history_clicked(entry),
                )
            )

    def history_clicked(self, entry: HistoryEntry) -> None:
        self.dispatch(Intent(IntentKind.RECALL, entry=entry))

    def clear_history_clicked(self, e: ft.ControlEvent) -> None:
        self.dispatch(Intent(IntentKind.CLEAR_HISTORY))

    #履歴パネルの表示切替
    def toggle_history(self, e: ft.ControlEvent) -> None:
        self.history_panel.visible = not self.history_panel.visible
        self.update()

    #ライト/ダークテーマの切替
    def toggle_theme(self, e: ft.ControlEvent) -> None:
        self.theme_name = "dark" if self.theme_name == "light" else "light"
        self.apply_theme()
        self.render_history()
        if self.page:
            self.page.theme_mode = ft.ThemeMode.DARK if self.theme_name == "dark" else ft.ThemeMode.LIGHT
            self.page.bgcolor = THEMES[self.theme_name]['background']
            self.page.update()
        else:
            self.update()

    def apply_theme(self) -> None:
        colors = THEMES[self.theme_name]
        self.bgcolor = colors['background']
        self.keypad.bgcolor = colors['card']
        self.history_panel.bgcolor = colors['card']
        self.current_display.color = colors['display']
        self.previous_display.color = colors['display_sub']
        self.theme_button.icon = ft.Icons.LIGHT_MODE if self.theme_name == "dark" else ft.Icons.DARK_MODE
        for button in self.buttons:
            button.apply_theme(colors)

    #エンジンからの通知を表示
    def show_notice(self, notice: Notice) -> None:
        self.show_message(notice.message)

    def show_message(self, message: str) -> None:
        if not self.page:
            return
        self.page.open(ft.SnackBar(content=ft.Text(message), duration=TOAST_DURATION_MS))


def main(page: ft.Page):
    page.title = "電卓"
    page.theme_mode = ft.ThemeMode.LIGHT
    page.bgcolor = THEMES['light']['background']
    page.window.width = WINDOW_WIDTH
    page.window.height = WINDOW_HEIGHT
    calc = CalculatorApp()
    page.on_keyboard_event = calc.key_pressed
    page.add(calc)


def run():
    """アプリケーションのメインエントリーポイント"""
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    ft.app(target=main)


if __name__ == "__main__":
    run()
