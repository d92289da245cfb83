from .dump import DiagnosticRecorder, render_inspection_page

__all__ = ["DiagnosticRecorder", "render_inspection_page"]
