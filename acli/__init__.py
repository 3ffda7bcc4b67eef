# MIT License © 2025 Motohiro Suzuki
__version__ = "0.1.0"
