import os

# 計算結果を丸める小数点以下の桁数
PRECISION = 8

# トースト表示時間 (ミリ秒)
TOAST_DURATION_MS = 2000

WINDOW_WIDTH = 720
WINDOW_HEIGHT = 640

LOG_LEVEL = os.environ.get("CALCULATOR_LOG_LEVEL", "INFO").upper()

# テーマごとのカラー定義
THEMES = {
    'light': {
        'background': '#F5F5F5',
        'card': '#FFFFFF',
        'display': '#212121',
        'display_sub': '#757575',
        'digit_bg': '#ECEFF1',
        'digit_fg': '#212121',
        'operator_bg': '#FFA000',
        'operator_fg': '#FFFFFF',
        'function_bg': '#CFD8DC',
        'function_fg': '#212121',
        'history_item': '#E3F2FD',
        'divider': '#BDBDBD',
    },
    'dark': {
        'background': '#121212',
        'card': '#000000',
        'display': '#FFFFFF',
        'display_sub': '#9E9E9E',
        'digit_bg': '#424242',
        'digit_fg': '#FFFFFF',
        'operator_bg': '#FF9800',
        'operator_fg': '#FFFFFF',
        'function_bg': '#78909C',
        'function_fg': '#000000',
        'history_item': '#263238',
        'divider': '#616161',
    },
}
