"""SKU 바코드 순서 설정 창"""

import tkinter as tk
from tkinter import ttk, filedialog
from typing import Callable, List, Optional

from .base_ui import UIUtils, COLOR_DEFECT, COLOR_SUCCESS, COLOR_TEXT
from .components import DataDisplayComponent
from ..core.config_store import ConfigStore, CONFIG_FILENAME
from ..core.patterns import validate_pattern
from ..utils.exceptions import VerificationError
from ..utils.logger import EventLogger


class ConfigEditorWindow:
    """SKU 추가/삭제, 바코드 패턴 추가/삭제/순서 변경, 스테이션 설정을 편집합니다."""

    def __init__(self, root: tk.Tk, store: ConfigStore, on_saved: Optional[Callable[[], None]] = None,
                 event_logger: Optional[EventLogger] = None):
        self.store = store
        self.on_saved = on_saved
        self.event_logger = event_logger
        self.selected_sku: Optional[str] = None
        self._sku_ids: List[str] = []

        self.window = tk.Toplevel(root)
        self.window.title("스테이션 설정")
        self.window.geometry("1100x700")
        self.window.transient(root)

        self._create_widgets()
        self._load_form_values()
        self._render_sku_list()

    def _log_event(self, event_type: str, detail=None):
        if self.event_logger:
            self.event_logger.log_event(event_type, detail)

    def _create_widgets(self):
        main = ttk.Frame(self.window, padding=10)
        main.pack(fill=tk.BOTH, expand=True)
        main.grid_columnconfigure(0, weight=1)
        main.grid_columnconfigure(1, weight=2)
        main.grid_rowconfigure(1, weight=1)

        station_frame = ttk.LabelFrame(main, text="스테이션", padding=10)
        station_frame.grid(row=0, column=0, columnspan=2, sticky='ew', pady=(0, 10))
        station_frame.grid_columnconfigure(1, weight=1)
        _, self.title_entry = UIUtils.create_labeled_entry(station_frame, "스테이션 제목:", width=40, row=0)
        _, self.auto_restart_entry = UIUtils.create_labeled_entry(station_frame, "자동 재시작(초, 0=사용 안 함):", width=8, row=1, sticky='w')

        # SKU 목록
        sku_frame = ttk.Frame(main)
        sku_frame.grid(row=1, column=0, sticky='nsew', padx=(0, 10))
        add_sku_frame = ttk.Frame(sku_frame)
        add_sku_frame.pack(fill=tk.X)
        self.new_sku_entry = ttk.Entry(add_sku_frame)
        self.new_sku_entry.pack(side=tk.LEFT, fill=tk.X, expand=True, padx=(10, 5))
        self.new_sku_entry.bind('<Return>', lambda e: self.add_sku())
        ttk.Button(add_sku_frame, text="SKU 추가", command=self.add_sku).pack(side=tk.LEFT)
        ttk.Button(add_sku_frame, text="삭제", command=self.delete_sku).pack(side=tk.LEFT, padx=(5, 10))

        self.sku_table = DataDisplayComponent(sku_frame, "SKU 목록", ['sku', 'count'],
                                              {'sku': 'SKU', 'count': '바코드 수'}).build()
        self.sku_table.set_callback('select', self._on_sku_selected)

        # 바코드 목록
        barcode_frame = ttk.Frame(main)
        barcode_frame.grid(row=1, column=1, sticky='nsew')
        self.selected_sku_label = ttk.Label(barcode_frame, text="SKU를 선택하세요", style='Header.TLabel')
        self.selected_sku_label.pack(anchor='w', padx=10)

        form = ttk.Frame(barcode_frame)
        form.pack(fill=tk.X, pady=5)
        form.grid_columnconfigure(1, weight=1)
        _, self.barcode_name_entry = UIUtils.create_labeled_entry(form, "바코드 이름:", row=0)
        _, self.barcode_regex_entry = UIUtils.create_labeled_entry(form, "정규식 패턴:", row=1)
        self.barcode_regex_entry.bind('<KeyRelease>', self._on_regex_changed)
        self.regex_feedback = ttk.Label(form, text="")
        self.regex_feedback.grid(row=2, column=1, sticky='w', padx=(2, 5))
        ttk.Button(form, text="바코드 추가", command=self.add_barcode).grid(row=0, column=2, rowspan=2, padx=5, sticky='ns')

        self.barcode_table = DataDisplayComponent(barcode_frame, "스캔 순서", ['no', 'name', 'regex'],
                                                  {'no': 'No.', 'name': '이름', 'regex': '패턴'}).build()
        self.barcode_table.set_column_width('no', 50)

        order_frame = ttk.Frame(barcode_frame)
        order_frame.pack(fill=tk.X, padx=10)
        ttk.Button(order_frame, text="▲ 위로", command=lambda: self.move_barcode(-1)).pack(side=tk.LEFT)
        ttk.Button(order_frame, text="▼ 아래로", command=lambda: self.move_barcode(1)).pack(side=tk.LEFT, padx=5)
        ttk.Button(order_frame, text="삭제", command=self.delete_barcode).pack(side=tk.LEFT)

        # 파일
        file_frame = ttk.Frame(main)
        file_frame.grid(row=2, column=0, columnspan=2, sticky='e', pady=(10, 0))
        ttk.Button(file_frame, text="가져오기", command=self.import_config).pack(side=tk.LEFT, padx=5)
        ttk.Button(file_frame, text="내보내기", command=self.export_config).pack(side=tk.LEFT, padx=5)
        ttk.Button(file_frame, text="다시 불러오기", command=self.reload_config).pack(side=tk.LEFT, padx=5)
        ttk.Button(file_frame, text="저장", command=self.save_config).pack(side=tk.LEFT, padx=5)

    def _load_form_values(self):
        self.title_entry.delete(0, tk.END)
        self.title_entry.insert(0, self.store.station_title)
        self.auto_restart_entry.delete(0, tk.END)
        self.auto_restart_entry.insert(0, str(self.store.auto_restart_seconds))

    def _render_sku_list(self):
        self._sku_ids = list(self.store.skus.keys())
        self.sku_table.set_items([[sku_id, len(self.store.skus[sku_id].sequence)] for sku_id in self._sku_ids])
        if self.selected_sku in self._sku_ids:
            self.sku_table.select_index(self._sku_ids.index(self.selected_sku))
        self._render_barcode_list()

    def _render_barcode_list(self):
        sku = self.store.get_sku(self.selected_sku) if self.selected_sku else None
        if sku is None:
            self.selected_sku = None
            self.selected_sku_label.config(text="SKU를 선택하세요")
            self.barcode_table.clear_items()
            return
        self.selected_sku_label.config(text=sku.id)
        self.barcode_table.set_items([[i + 1, spec.name, spec.pattern] for i, spec in enumerate(sku.sequence)])

    def _on_sku_selected(self, index: Optional[int]):
        if index is None or index >= len(self._sku_ids):
            return
        if self.selected_sku != self._sku_ids[index]:
            self.selected_sku = self._sku_ids[index]
            self._render_barcode_list()

    def _on_regex_changed(self, event=None):
        pattern = self.barcode_regex_entry.get().strip()
        if not pattern:
            self.regex_feedback.config(text="", foreground=COLOR_TEXT)
            return
        error = validate_pattern(pattern)
        if error:
            self.regex_feedback.config(text=f"잘못된 패턴: {error}", foreground=COLOR_DEFECT)
        else:
            self.regex_feedback.config(text="올바른 패턴", foreground=COLOR_SUCCESS)

    def _show_error(self, error: Exception):
        UIUtils.show_error_message("설정 오류", str(error), parent=self.window)

    # ------------------------------------------------------------------
    # 편집 명령
    # ------------------------------------------------------------------

    def add_sku(self):
        try:
            sku = self.store.add_sku(self.new_sku_entry.get())
        except VerificationError as e:
            self._show_error(e)
            return
        self.new_sku_entry.delete(0, tk.END)
        self.selected_sku = sku.id
        self._render_sku_list()

    def delete_sku(self):
        if not self.selected_sku:
            return
        if not UIUtils.ask_yes_no("SKU 삭제", f"SKU '{self.selected_sku}'를 삭제하시겠습니까?", parent=self.window):
            return
        self.store.delete_sku(self.selected_sku)
        self.selected_sku = None
        self._render_sku_list()

    def add_barcode(self):
        if not self.selected_sku:
            UIUtils.show_error_message("설정 오류", "먼저 SKU를 선택해주세요.", parent=self.window)
            return
        try:
            self.store.add_barcode(self.selected_sku, self.barcode_name_entry.get(), self.barcode_regex_entry.get())
        except VerificationError as e:
            self._show_error(e)
            return
        self.barcode_name_entry.delete(0, tk.END)
        self.barcode_regex_entry.delete(0, tk.END)
        self._on_regex_changed()
        self._render_sku_list()

    def delete_barcode(self):
        index = self.barcode_table.get_selected_index()
        if not self.selected_sku or index is None:
            return
        if not UIUtils.ask_yes_no("바코드 삭제", "선택한 바코드 설정을 삭제하시겠습니까?", parent=self.window):
            return
        self.store.delete_barcode(self.selected_sku, index)
        self._render_sku_list()

    def move_barcode(self, offset: int):
        index = self.barcode_table.get_selected_index()
        if not self.selected_sku or index is None:
            return
        target = index + offset
        try:
            self.store.move_barcode(self.selected_sku, index, target)
        except VerificationError:
            return
        self._render_barcode_list()
        self.barcode_table.select_index(target)

    def _apply_form_values(self) -> bool:
        try:
            self.store.set_station_title(self.title_entry.get())
            self.store.set_auto_restart_seconds(self.auto_restart_entry.get().strip() or 0)
        except VerificationError as e:
            self._show_error(e)
            return False
        return True

    def save_config(self):
        if not self._apply_form_values():
            return
        try:
            path = self.store.save()
        except VerificationError as e:
            self._show_error(e)
            return
        self._log_event('CONFIG_SAVED', {'path': path, 'sku_count': len(self.store.skus)})
        UIUtils.show_info_message("저장 완료", f"설정이 저장되었습니다.\n{path}", parent=self.window)
        if self.on_saved:
            self.on_saved()

    def reload_config(self):
        try:
            path = self.store.load()
        except VerificationError as e:
            self._show_error(e)
            return
        self._log_event('CONFIG_LOADED', {'path': path, 'sku_count': len(self.store.skus)})
        self.selected_sku = None
        self._load_form_values()
        self._render_sku_list()
        if self.on_saved:
            self.on_saved()

    def import_config(self):
        path = filedialog.askopenfilename(parent=self.window, title="설정 가져오기",
                                          filetypes=[("JSON 파일", "*.json"), ("모든 파일", "*.*")])
        if not path:
            return
        try:
            self.store.import_from(path)
        except VerificationError as e:
            self._show_error(e)
            return
        self._log_event('CONFIG_IMPORTED', {'path': path})
        self.selected_sku = None
        self._load_form_values()
        self._render_sku_list()

    def export_config(self):
        if not self._apply_form_values():
            return
        path = filedialog.asksaveasfilename(parent=self.window, title="설정 내보내기",
                                            initialfile=CONFIG_FILENAME, defaultextension=".json",
                                            filetypes=[("JSON 파일", "*.json"), ("모든 파일", "*.*")])
        if not path:
            return
        try:
            self.store.export_to(path)
        except VerificationError as e:
            self._show_error(e)
            return
        self._log_event('CONFIG_EXPORTED', {'path': path})
        UIUtils.show_info_message("내보내기 완료", f"설정을 내보냈습니다.\n{path}", parent=self.window)
