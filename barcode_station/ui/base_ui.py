"""기본 UI 컴포넌트와 유틸리티 클래스"""

import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional, Callable, Dict, Tuple
from abc import ABC, abstractmethod

DEFAULT_FONT = 'Malgun Gothic'

COLOR_BG = "#F5F7FA"
COLOR_SIDEBAR_BG = "#FFFFFF"
COLOR_TEXT = "#343A40"
COLOR_TEXT_SUBTLE = "#6C757D"
COLOR_PRIMARY = "#0D6EFD"
COLOR_SUCCESS = "#28A745"
COLOR_DEFECT = "#DC3545"
COLOR_INFO = "#17A2B8"
COLOR_IDLE = "#FFC107"
COLOR_BORDER = "#CED4DA"
COLOR_PASS_BG = "#D4EDDA"
COLOR_FAIL_BG = "#FADBD8"


class BaseUIComponent(ABC):
    """UI 컴포넌트의 기본 클래스"""

    def __init__(self, parent: tk.Widget):
        self.parent = parent
        self.frame = None
        self.callbacks: Dict[str, Callable] = {}

    @abstractmethod
    def create_widgets(self):
        """위젯들을 생성합니다."""
        pass

    @abstractmethod
    def setup_layout(self):
        """레이아웃을 설정합니다."""
        pass

    def build(self):
        self.create_widgets()
        self.setup_layout()
        return self

    def set_callback(self, event_name: str, callback: Callable):
        """콜백 함수를 설정합니다."""
        self.callbacks[event_name] = callback

    def trigger_callback(self, event_name: str, *args, **kwargs):
        """콜백 함수를 실행합니다."""
        if event_name in self.callbacks:
            return self.callbacks[event_name](*args, **kwargs)


class UIUtils:
    """UI 관련 유틸리티 함수들"""

    @staticmethod
    def create_labeled_entry(parent: tk.Widget, label_text: str,
                           width: int = 20, row: int = 0, column: int = 0,
                           sticky: str = "ew") -> Tuple[ttk.Label, ttk.Entry]:
        """라벨과 엔트리를 함께 생성합니다."""
        label = ttk.Label(parent, text=label_text)
        label.grid(row=row, column=column, sticky="w", padx=(5, 2), pady=2)

        entry = ttk.Entry(parent, width=width)
        entry.grid(row=row, column=column+1, sticky=sticky, padx=(2, 5), pady=2)

        return label, entry

    @staticmethod
    def show_error_message(title: str, message: str, parent: Optional[tk.Widget] = None):
        """에러 메시지를 표시합니다."""
        messagebox.showerror(title, message, parent=parent)

    @staticmethod
    def show_info_message(title: str, message: str, parent: Optional[tk.Widget] = None):
        """정보 메시지를 표시합니다."""
        messagebox.showinfo(title, message, parent=parent)

    @staticmethod
    def ask_yes_no(title: str, message: str, parent: Optional[tk.Widget] = None) -> bool:
        """예/아니오 확인 대화상자를 표시합니다."""
        return messagebox.askyesno(title, message, parent=parent)


class StyleManager:
    """UI 스타일을 관리하는 클래스"""

    def __init__(self):
        self.style = ttk.Style()

    def setup_default_styles(self, scale: float = 1.0):
        """기본 스타일들을 설정합니다."""
        self.style.configure('TFrame', background=COLOR_BG)
        self.style.configure('TLabel', background=COLOR_BG, foreground=COLOR_TEXT, font=(DEFAULT_FONT, int(11 * scale)))
        self.style.configure('Default.TButton', padding=(10, 5), font=(DEFAULT_FONT, int(11 * scale)))

        # 헤더 스타일
        self.style.configure('Header.TLabel', background=COLOR_BG, font=(DEFAULT_FONT, int(22 * scale), 'bold'))
        self.style.configure('CurrentStep.TLabel', background=COLOR_BG, foreground=COLOR_PRIMARY,
                             font=(DEFAULT_FONT, int(18 * scale), 'bold'))

        # 진행 단계 스타일
        self.style.configure('StepDone.TLabel', background=COLOR_PASS_BG, foreground=COLOR_SUCCESS,
                             font=(DEFAULT_FONT, int(12 * scale), 'bold'))
        self.style.configure('StepCurrent.TLabel', background=COLOR_SIDEBAR_BG, foreground=COLOR_PRIMARY,
                             font=(DEFAULT_FONT, int(12 * scale), 'bold'))
        self.style.configure('StepPending.TLabel', background=COLOR_BG, foreground=COLOR_TEXT_SUBTLE,
                             font=(DEFAULT_FONT, int(12 * scale)))
