import tkinter as tk
from tkinter import ttk, messagebox
import os
from typing import Optional

import pygame

from barcode_station.core.config_store import ConfigStore, CONFIG_FILENAME
from barcode_station.core.events import (RecordSaved, RecordWriteFailed, RunCompleted, SessionCleared,
                                         SessionStarted, StepAccepted, StepRejected)
from barcode_station.core.recorder import RunRecorder
from barcode_station.core.sequencer import SequencerState
from barcode_station.core.station import VerificationStation
from barcode_station.ui.base_ui import (StyleManager, DEFAULT_FONT, COLOR_BG, COLOR_SIDEBAR_BG, COLOR_TEXT,
                                        COLOR_DEFECT, COLOR_SUCCESS, COLOR_INFO, COLOR_IDLE)
from barcode_station.ui.components import ScannerInputComponent, SequenceProgressComponent, ResultBannerComponent
from barcode_station.ui.config_window import ConfigEditorWindow
from barcode_station.utils.config_manager import ConfigManager
from barcode_station.utils.exceptions import (VerificationError, EmptyScanError, InvalidStateError,
                                              RunAlreadyCompleteError)
from barcode_station.utils.file_handler import resource_path
from barcode_station.utils.logger import EventLogger


class VerificationProgram:
    """바코드 순차 검증 작업을 위한 메인 GUI 어플리케이션 클래스입니다."""
    SKU_PLACEHOLDER = "-- SKU 선택 --"

    def __init__(self, settings: ConfigManager):
        self.settings = settings
        self.root = tk.Tk()
        app_title = f"{settings.get('ui.window_title', '바코드 검증 스테이션')} ({settings.get('app.version', 'v1.0.0')})"
        self.root.title(app_title)
        self.root.geometry(settings.get('ui.window_geometry', '1400x900'))
        self.root.configure(bg=COLOR_BG)

        try:
            self.root.iconbitmap(resource_path(os.path.join('assets', 'logo.ico')))
        except tk.TclError as e:
            print(f"아이콘 로드 실패: {e}")

        self.success_sound = self.error_sound = None
        if settings.get('sound.enabled', True):
            self._load_sounds()

        self.event_logger = EventLogger(settings.resolve_path('logging.log_file', 'logs/station_event_log.csv'),
                                        enabled=settings.get('logging.enabled', True))
        self.store = ConfigStore(filename=settings.get('station.config_file', CONFIG_FILENAME))
        self.recorder = RunRecorder(settings.resolve_path('station.records_folder', 'records'))
        self.station = VerificationStation(self.store, self.recorder, self.root, self.event_logger)
        self.station.add_listener(self._on_station_event)

        self.status_message_job: Optional[str] = None
        self.focus_return_job: Optional[str] = None
        self.config_window: Optional[ConfigEditorWindow] = None

        self._setup_styles()
        self._setup_core_ui_structure()
        self._load_configuration()

        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)

    def _load_sounds(self):
        try:
            pygame.mixer.init()
            self.success_sound = pygame.mixer.Sound(resource_path('assets/success.wav'))
            self.error_sound = pygame.mixer.Sound(resource_path('assets/error.wav'))
        except (pygame.error, FileNotFoundError) as e:
            print(f"사운드 파일을 로드할 수 없습니다: {e}")
            self.success_sound = self.error_sound = None

    def _setup_styles(self):
        self.style_manager = StyleManager()
        self.style_manager.setup_default_styles()

    def _setup_core_ui_structure(self):
        status_bar = tk.Frame(self.root, bg=COLOR_SIDEBAR_BG, bd=1, relief=tk.SUNKEN)
        status_bar.pack(side=tk.BOTTOM, fill=tk.X)
        self.status_label = tk.Label(status_bar, text="준비", anchor=tk.W, bg=COLOR_SIDEBAR_BG, fg=COLOR_TEXT)
        self.status_label.pack(side=tk.LEFT, padx=10, pady=4)
        self.pass_count_label = tk.Label(status_bar, text="", anchor=tk.E, bg=COLOR_SIDEBAR_BG, fg=COLOR_TEXT)
        self.pass_count_label.pack(side=tk.RIGHT, padx=10, pady=4)

        main_frame = ttk.Frame(self.root, padding=10)
        main_frame.pack(fill=tk.BOTH, expand=True)

        header = ttk.Frame(main_frame)
        header.pack(fill=tk.X, padx=30, pady=(5, 10))
        self.station_title_label = ttk.Label(header, text="", style='Header.TLabel')
        self.station_title_label.pack(side=tk.LEFT)
        ttk.Button(header, text="설정", command=self.open_config_window, style='Default.TButton').pack(side=tk.RIGHT)

        sku_frame = ttk.Frame(main_frame)
        sku_frame.pack(fill=tk.X, padx=30)
        ttk.Label(sku_frame, text="SKU:").pack(side=tk.LEFT)
        self.sku_combobox = ttk.Combobox(sku_frame, state='readonly', font=(DEFAULT_FONT, 14), width=30)
        self.sku_combobox.pack(side=tk.LEFT, padx=(10, 0))
        self.sku_combobox.bind('<<ComboboxSelected>>', self.on_sku_selected)

        self.current_step_label = ttk.Label(main_frame, text="먼저 SKU를 선택해주세요", style='CurrentStep.TLabel',
                                            anchor='center')
        self.current_step_label.pack(fill=tk.X, padx=30, pady=(15, 5))

        self.scanner_input = ScannerInputComponent(main_frame).build()
        self.scanner_input.set_callback('scan', self.process_scan)
        self.scanner_input.set_callback('restart', self.restart_scan)

        self.result_banner = ResultBannerComponent(main_frame).build()
        self.progress_display = SequenceProgressComponent(main_frame).build()

        self._apply_selection_ui()

    # ------------------------------------------------------------------
    # 설정
    # ------------------------------------------------------------------

    def _load_configuration(self):
        try:
            path = self.station.reload_configuration()
        except VerificationError as e:
            self.show_status_message(f"설정 로드 오류: {e}", COLOR_IDLE)
            self.update_station_title_display()
            self.update_sku_list()
            return
        self.update_station_title_display()
        self.update_sku_list()
        self.show_status_message(f"설정을 불러왔습니다 ({path})", COLOR_SUCCESS)

    def _on_config_saved(self):
        self.station.apply_auto_restart_seconds()
        self.update_station_title_display()
        self.update_sku_list()

    def open_config_window(self):
        if self.config_window and self.config_window.window.winfo_exists():
            self.config_window.window.lift()
            return
        self.config_window = ConfigEditorWindow(self.root, self.store, on_saved=self._on_config_saved,
                                                event_logger=self.event_logger)

    def update_station_title_display(self):
        self.station_title_label.config(text=self.store.station_title or "Production Station")

    def update_sku_list(self):
        """바코드가 하나 이상 있는 SKU만 선택 목록에 표시합니다."""
        sku_ids = [sku.id for sku in self.station.eligible_skus()]
        self.sku_combobox['values'] = [self.SKU_PLACEHOLDER] + sku_ids
        current = self.station.current_sku_id
        self.sku_combobox.set(current if current in sku_ids else self.SKU_PLACEHOLDER)

    # ------------------------------------------------------------------
    # 명령
    # ------------------------------------------------------------------

    def on_sku_selected(self, event=None):
        value = self.sku_combobox.get()
        sku_id = None if value == self.SKU_PLACEHOLDER else value
        try:
            self.station.select_sku(sku_id)
        except VerificationError as e:
            self.show_status_message(str(e), COLOR_DEFECT)
            self.update_sku_list()
        self._schedule_focus_return()

    def process_scan(self, raw: str):
        try:
            self.station.submit_scan(raw)
        except EmptyScanError as e:
            self.show_status_message(str(e), COLOR_DEFECT)
        except RunAlreadyCompleteError as e:
            self.show_status_message(str(e), COLOR_INFO)
        except InvalidStateError as e:
            self.show_status_message(str(e), COLOR_DEFECT)
        self._schedule_focus_return()

    def restart_scan(self):
        try:
            self.station.restart()
        except InvalidStateError as e:
            self.show_status_message(str(e), COLOR_DEFECT)
        self._schedule_focus_return()

    # ------------------------------------------------------------------
    # 이벤트 표시
    # ------------------------------------------------------------------

    def _on_station_event(self, event):
        if isinstance(event, SessionStarted):
            if event.reason == 'auto':
                self.result_banner.show("🔄 자동으로 다시 시작합니다...", 'info')
            else:
                self.result_banner.clear()
            self.scanner_input.clear_input()
        elif isinstance(event, SessionCleared):
            self.result_banner.clear()
        elif isinstance(event, RunCompleted):
            self._play(self.success_sound)
            self.result_banner.show("🎉 PASS - 모든 바코드가 검증되었습니다!", 'pass')
        elif isinstance(event, StepAccepted):
            self._play(self.success_sound)
            self.result_banner.show(f"✓ {event.spec.name} 일치: {event.value}", 'success')
        elif isinstance(event, StepRejected):
            self._play(self.error_sound)
            self.result_banner.show(f"✗ {event.spec.name} 불일치: {event.value}", 'error')
        elif isinstance(event, RecordSaved):
            self.show_status_message(f"검증 기록 저장: {event.path}", COLOR_SUCCESS)
        elif isinstance(event, RecordWriteFailed):
            self.show_status_message(f"경고: {event.error}", COLOR_DEFECT)

        self._apply_selection_ui()

    def _apply_selection_ui(self):
        session = self.station.sequencer.session
        state = self.station.sequencer.state
        self.scanner_input.set_enabled(session is not None)

        if session is None:
            self.progress_display.clear()
            self.current_step_label.config(text="먼저 SKU를 선택해주세요")
            self.pass_count_label.config(text="")
            return

        self.progress_display.render(session.field_names, session.position, session.accumulated_values)
        if state == SequencerState.COMPLETE:
            self.current_step_label.config(text="모든 바코드 스캔 완료!")
        else:
            self.current_step_label.config(text=f"스캔: {session.current_spec.name}")
        self.pass_count_label.config(text=f"오늘 {session.sku_id} 통과: {self.station.todays_pass_count()}건")

    def _play(self, sound):
        if sound:
            sound.play()

    def _schedule_focus_return(self, delay_ms: int = 100):
        if self.focus_return_job:
            self.root.after_cancel(self.focus_return_job)
        self.focus_return_job = self.root.after(delay_ms, self._return_focus_to_scan_entry)

    def _return_focus_to_scan_entry(self):
        self.focus_return_job = None
        self.scanner_input.focus_input()

    def show_status_message(self, message: str, color: Optional[str] = None, duration: Optional[int] = None):
        if not self.root.winfo_exists(): return
        duration = duration or self.settings.get('ui.status_message_ms', 5000)
        if self.status_message_job: self.root.after_cancel(self.status_message_job)
        self.status_label['text'], self.status_label['fg'] = message, color or COLOR_TEXT
        self.status_message_job = self.root.after(duration, self._reset_status_message)

    def _reset_status_message(self):
        self.status_message_job = None
        if hasattr(self, 'status_label') and self.status_label.winfo_exists():
            self.status_label['text'], self.status_label['fg'] = "준비", COLOR_TEXT

    def _cancel_all_jobs(self):
        for job_attr in ['status_message_job', 'focus_return_job']:
            job_id = getattr(self, job_attr, None)
            if job_id:
                self.root.after_cancel(job_id)
                setattr(self, job_attr, None)
        self.station.scheduler.cancel()

    def on_closing(self):
        if messagebox.askokcancel("종료", "프로그램을 종료하시겠습니까?"):
            self.event_logger.log_event('STATION_CLOSED')
            self._cancel_all_jobs()
            self.event_logger.stop_logger()
            pygame.quit()
            self.root.destroy()

    def run(self):
        self.event_logger.log_event('STATION_STARTED', {'version': self.settings.get('app.version')})
        self._schedule_focus_return()
        self.root.mainloop()


def main():
    app = VerificationProgram(ConfigManager())
    app.run()


if __name__ == "__main__":
    main()
