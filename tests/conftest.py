"""Shared fixtures for citeview tests."""

import pytest

from cite_core.buffer import Display
from cite_core.config import CiteConfig
from cite_core.runner import ProcessRunner

SAMPLE_OUTPUT = """[1706.03762] (arxiv)
Attention Is All You Need
Vaswani, Shazeer, Parmar
2017
[2103.00020] (arxiv)
Learning Transferable Visual Models From Natural Language Supervision
Radford, Kim, Hallacy
2021
"""


class FakeProcess:
    """Minimal Popen stand-in; poll() reports returncode once the process has 'exited'."""

    def __init__(self):
        self.returncode = None

    def poll(self):
        return self.returncode


class FakeExecutor:
    """Stands in for CommandExecutor and records every command it is given."""

    def __init__(self, output: str = SAMPLE_OUTPUT, returncode: int = 0, spawn_ok: bool = True):
        self.output = output
        self.returncode = returncode
        self.spawn_ok = spawn_ok
        self.run_calls = []
        self.spawn_calls = []
        self.processes = []

    def run(self, cmd, merge_stderr=False):
        self.run_calls.append(cmd)
        return self.returncode, self.output, ""

    def spawn(self, cmd):
        self.spawn_calls.append(cmd)
        if not self.spawn_ok:
            return None
        process = FakeProcess()
        self.processes.append(process)
        return process


@pytest.fixture
def settings():
    """Settings with a primary bibliography and no secondary folder."""
    return CiteConfig(
        executable="pyopl",
        engines={"available": ["arxiv", "crossref"]},
        bibliography={"file": "/home/u/refs.bib"},
    )


@pytest.fixture
def executor():
    return FakeExecutor()


@pytest.fixture
def display():
    return Display()


@pytest.fixture
def runner(display, executor):
    return ProcessRunner(display, executor=executor)
