# MIT License © 2025 Motohiro Suzuki
from acli.cli import run

run()
