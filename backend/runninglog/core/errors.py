class RunningLogError(Exception):
    """Base class for errors raised by the running log."""


class RunNotFoundError(RunningLogError):
    def __init__(self, run_id: int):
        super().__init__(f"Run {run_id} not found")
        self.run_id = run_id


class CsvFormatError(RunningLogError):
    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line


class GitError(RunningLogError):
    def __init__(self, args: list[str], returncode: int, stderr: str):
        cmd = " ".join(args)
        super().__init__(f"'{cmd}' exited with {returncode}: {stderr.strip()}")
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr
