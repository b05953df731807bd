"""테스트용 가짜 타이머 루트 (tkinter after/after_cancel 대체)"""


class FakeRoot:
    """가상 시계로 after 작업을 실행합니다."""

    def __init__(self):
        self.now_ms = 0
        self._jobs = {}
        self._next_id = 0

    def after(self, delay_ms, func):
        self._next_id += 1
        job_id = f"after#{self._next_id}"
        self._jobs[job_id] = (self.now_ms + delay_ms, func)
        return job_id

    def after_cancel(self, job_id):
        self._jobs.pop(job_id, None)

    @property
    def pending_jobs(self):
        return len(self._jobs)

    def advance(self, seconds):
        """가상 시간을 진행하고 만기된 작업을 순서대로 실행합니다."""
        target = self.now_ms + int(seconds * 1000)
        while True:
            due = [(when, job_id) for job_id, (when, _) in self._jobs.items() if when <= target]
            if not due:
                break
            when, job_id = min(due)
            _, func = self._jobs.pop(job_id)
            self.now_ms = when
            func()
        self.now_ms = target
