"""DOCX export for tailored résumé versions."""
from ats_tailor.export.docx_exporter import (
    SECTION_ORDER,
    export_version_docx,
    generate_ats_resume,
    order_sections,
)

__all__ = ["SECTION_ORDER", "export_version_docx", "generate_ats_resume", "order_sections"]
