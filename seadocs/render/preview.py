"""First-page PNG preview of an exported PDF."""

from pathlib import Path

try:
    import fitz  # pymupdf
except ImportError:
    fitz = None

from .pdf_renderer import PDFRenderError

PREVIEW_DPI = 110


def render_preview(pdf_path, output_dir, dpi: int = PREVIEW_DPI) -> Path:
    """Render page 1 of a PDF to ``<output_dir>/<pdf stem>_preview.png``.

    Args:
        pdf_path: Exported document
        output_dir: Directory to save the image
        dpi: Resolution in dots per inch (default 110, screen preview)

    Returns:
        Path to saved image file

    Raises:
        PDFRenderError: If the PDF cannot be opened or rendered
        ImportError: If pymupdf (fitz) is not installed
    """
    if fitz is None:
        raise ImportError(
            "pymupdf (fitz) is required for previews. "
            "Install with: pip install pymupdf"
        )

    pdf_path = Path(pdf_path)
    try:
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)
        image_path = output_path / f"{pdf_path.stem}_preview.png"

        pdf_doc = fitz.open(str(pdf_path))
        try:
            # Matrix: scale factor for DPI (dpi / 72)
            zoom = float(dpi) / 72.0
            pix = pdf_doc[0].get_pixmap(matrix=fitz.Matrix(zoom, zoom))
            pix.save(str(image_path))
        finally:
            pdf_doc.close()

        return image_path

    except Exception as e:
        raise PDFRenderError(f"Failed to render preview of {pdf_path.name}: {str(e)}") from e
