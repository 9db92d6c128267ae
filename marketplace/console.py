from typing import List


class Console:

    @staticmethod
    def select(prompt: str, options: List[str]) -> str:
        while True:
            try:
                raw = input(f"{prompt} [ {'/'.join(options + ['q(uit)'])} ] : ").strip()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return 'quit'
            if not raw: continue
            ans = raw.lower()
            if ans in ('q', 'quit'): return 'quit'
            for opt in options:
                if ans == opt.lower(): return opt

    @staticmethod
    def confirm(prompt: str) -> bool:
        while True:
            try:
                raw = input(f"{prompt} [ y/n/q(uit) ] : ").strip().lower()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return False
            if not raw: continue
            if raw in ('q', 'quit'): return False
            if raw in ('y', 'yes'): return True
            if raw in ('n', 'no'): return False

    @staticmethod
    def input_str(prompt: str, allow_empty: bool = False) -> str:
        while True:
            try:
                raw = input(f"{prompt} : ").strip()
            except (EOFError, KeyboardInterrupt):  # noqa: PERF203
                print()
                return ''
            if not raw and not allow_empty: continue
            return str(raw)
