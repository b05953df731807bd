"""특화된 UI 컴포넌트들"""

import tkinter as tk
from tkinter import ttk
from typing import List, Dict, Any, Optional, Sequence

from .base_ui import (BaseUIComponent, DEFAULT_FONT, COLOR_BORDER, COLOR_PRIMARY,
                      COLOR_DEFECT, COLOR_SUCCESS, COLOR_INFO, COLOR_TEXT, COLOR_BG,
                      COLOR_PASS_BG, COLOR_FAIL_BG)


class ScannerInputComponent(BaseUIComponent):
    """바코드 스캐너 입력과 제출/재시작 버튼을 처리하는 컴포넌트

    콜백: 'scan' (원본 입력 문자열), 'restart'
    """

    def __init__(self, parent: tk.Widget, scale: float = 1.0):
        super().__init__(parent)
        self.scale = scale
        self.entry: Optional[tk.Entry] = None
        self.submit_button: Optional[ttk.Button] = None
        self.restart_button: Optional[ttk.Button] = None

    def create_widgets(self):
        """스캐너 입력 관련 위젯들을 생성합니다."""
        self.frame = ttk.Frame(self.parent)

        self.entry = tk.Entry(self.frame, justify='center', font=(DEFAULT_FONT, int(26 * self.scale), 'bold'),
                              bd=2, relief=tk.SOLID, highlightbackground=COLOR_BORDER,
                              highlightcolor=COLOR_PRIMARY, highlightthickness=3)
        self.entry.pack(fill="x", ipady=int(12 * self.scale), pady=(0, 10))
        self.entry.bind('<Return>', self._on_submit)

        button_frame = ttk.Frame(self.frame)
        button_frame.pack()
        self.submit_button = ttk.Button(button_frame, text="스캔 제출", command=self._on_submit, style='Default.TButton')
        self.submit_button.pack(side="left", padx=10)
        self.restart_button = ttk.Button(button_frame, text="다시 시작",
                                         command=lambda: self.trigger_callback('restart'), style='Default.TButton')
        self.restart_button.pack(side="left", padx=10)

    def setup_layout(self):
        """레이아웃을 설정합니다."""
        self.frame.pack(fill="x", padx=30, pady=10)

    def _on_submit(self, event=None):
        raw = self.get_input_value()
        self.clear_input()
        self.trigger_callback('scan', raw)
        self.focus_input()

    def get_input_value(self) -> str:
        """현재 입력된 값을 반환합니다."""
        return self.entry.get() if self.entry else ""

    def clear_input(self):
        """입력 필드를 비웁니다."""
        if self.entry:
            self.entry.delete(0, 'end')

    def focus_input(self):
        """입력 필드에 포커스를 설정합니다."""
        if self.entry and self.entry.winfo_exists():
            self.entry.focus_set()

    def set_enabled(self, enabled: bool):
        state = tk.NORMAL if enabled else tk.DISABLED
        for widget in (self.entry, self.submit_button, self.restart_button):
            if widget:
                widget.config(state=state)


class SequenceProgressComponent(BaseUIComponent):
    """SKU 바코드 순서의 단계별 진행 상황을 표시하는 컴포넌트"""

    def __init__(self, parent: tk.Widget, scale: float = 1.0):
        super().__init__(parent)
        self.scale = scale
        self.progress_bar: Optional[ttk.Progressbar] = None
        self.count_label: Optional[ttk.Label] = None
        self.steps_frame: Optional[ttk.Frame] = None

    def create_widgets(self):
        """진행 표시 위젯들을 생성합니다."""
        self.frame = ttk.LabelFrame(self.parent, text="검증 진행", padding=10)

        self.progress_bar = ttk.Progressbar(self.frame, mode='determinate', maximum=1)
        self.progress_bar.pack(fill="x", pady=(0, 5))

        self.count_label = ttk.Label(self.frame, text="0 / 0")
        self.count_label.pack(anchor="e")

        self.steps_frame = ttk.Frame(self.frame)
        self.steps_frame.pack(fill="both", expand=True, pady=(5, 0))

    def setup_layout(self):
        """레이아웃을 설정합니다."""
        self.frame.pack(fill="both", expand=True, padx=30, pady=10)

    def render(self, names: Sequence[str], position: int, values: Sequence[str]):
        """단계 목록을 다시 그립니다. position 이전은 완료, position은 진행 중입니다."""
        for child in self.steps_frame.winfo_children():
            child.destroy()

        total = len(names)
        self.progress_bar['maximum'] = max(total, 1)
        self.progress_bar['value'] = min(position, total)
        self.count_label.config(text=f"{min(position, total)} / {total}")

        for index, name in enumerate(names):
            if index < position:
                style, status = 'StepDone.TLabel', f"✓ {values[index]}"
            elif index == position:
                style, status = 'StepCurrent.TLabel', "스캔 중..."
            else:
                style, status = 'StepPending.TLabel', "대기"
            row = ttk.Frame(self.steps_frame)
            row.pack(fill="x", pady=1)
            ttk.Label(row, text=f"{index + 1}. {name}", style=style, padding=(8, 4)).pack(side="left", fill="x", expand=True)
            ttk.Label(row, text=status, style=style, padding=(8, 4)).pack(side="right")

    def clear(self):
        self.render([], 0, [])


class ResultBannerComponent(BaseUIComponent):
    """가장 최근 스캔 결과 한 줄만 표시하는 컴포넌트"""

    COLORS = {
        'success': (COLOR_SUCCESS, COLOR_BG),
        'pass': ('white', COLOR_SUCCESS),
        'error': (COLOR_DEFECT, COLOR_FAIL_BG),
        'info': (COLOR_INFO, COLOR_BG),
    }

    def __init__(self, parent: tk.Widget, scale: float = 1.0):
        super().__init__(parent)
        self.scale = scale
        self.label: Optional[tk.Label] = None
        self._shake_job: Optional[str] = None

    def create_widgets(self):
        self.frame = tk.Frame(self.parent, bg=COLOR_BG)
        self.label = tk.Label(self.frame, text="", bg=COLOR_BG, fg=COLOR_TEXT,
                              font=(DEFAULT_FONT, int(20 * self.scale), 'bold'), pady=10)
        self.label.pack(fill="x")

    def setup_layout(self):
        self.frame.pack(fill="x", padx=30, pady=(0, 10))

    def show(self, message: str, kind: str = 'info'):
        """이전 결과를 지우고 새 결과를 표시합니다."""
        fg, bg = self.COLORS.get(kind, self.COLORS['info'])
        self.label.config(text=message, fg=fg, bg=bg)
        if kind == 'error':
            self._shake()

    def clear(self):
        self.label.config(text="", fg=COLOR_TEXT, bg=COLOR_BG)

    def _shake(self, step: int = 0):
        # 실패 시 짧게 좌우로 흔들어 주의를 끕니다
        if self._shake_job:
            self.label.after_cancel(self._shake_job)
            self._shake_job = None
        offsets = [12, -12, 8, -8, 4, -4, 0]
        if step >= len(offsets):
            return
        self.label.pack_configure(padx=(max(offsets[step], 0), max(-offsets[step], 0)))
        self._shake_job = self.label.after(40, lambda: self._shake(step + 1))


class DataDisplayComponent(BaseUIComponent):
    """데이터를 표시하는 테이블 컴포넌트"""

    def __init__(self, parent: tk.Widget, title: str, columns: List[str], headings: Optional[Dict[str, str]] = None):
        super().__init__(parent)
        self.title = title
        self.columns = columns
        self.headings = headings or {}
        self.treeview: Optional[ttk.Treeview] = None
        self.scrollbar: Optional[ttk.Scrollbar] = None

    def create_widgets(self):
        """데이터 표시 위젯들을 생성합니다."""
        self.frame = ttk.LabelFrame(self.parent, text=self.title, padding=5)

        tree_frame = ttk.Frame(self.frame)
        tree_frame.pack(fill="both", expand=True)

        self.treeview = ttk.Treeview(tree_frame, columns=self.columns, show="headings", selectmode="browse")
        self.scrollbar = ttk.Scrollbar(tree_frame, orient="vertical", command=self.treeview.yview)
        self.treeview.configure(yscrollcommand=self.scrollbar.set)

        for col in self.columns:
            self.treeview.heading(col, text=self.headings.get(col, col))
            self.treeview.column(col, width=100)

        self.treeview.pack(side="left", fill="both", expand=True)
        self.scrollbar.pack(side="right", fill="y")
        self.treeview.bind('<<TreeviewSelect>>', lambda e: self.trigger_callback('select', self.get_selected_index()))

    def setup_layout(self):
        """레이아웃을 설정합니다."""
        self.frame.pack(fill="both", expand=True, padx=10, pady=5)

    def set_items(self, rows: List[List[Any]]):
        """모든 행을 교체합니다."""
        self.clear_items()
        for values in rows:
            self.treeview.insert("", "end", values=values)

    def clear_items(self):
        """모든 아이템을 제거합니다."""
        if self.treeview:
            for item in self.treeview.get_children():
                self.treeview.delete(item)

    def get_selected_index(self) -> Optional[int]:
        """선택된 행의 순번을 반환합니다."""
        if not self.treeview:
            return None
        selection = self.treeview.selection()
        if not selection:
            return None
        return self.treeview.index(selection[0])

    def select_index(self, index: int):
        children = self.treeview.get_children()
        if 0 <= index < len(children):
            self.treeview.selection_set(children[index])
            self.treeview.see(children[index])

    def set_column_width(self, column: str, width: int):
        """컬럼 너비를 설정합니다."""
        if self.treeview:
            self.treeview.column(column, width=width)
