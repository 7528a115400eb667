import pytest

from app.helpers.parsing import extract_text, looks_binary
from app.utils.exceptions import ProcessingError, ValidationError


class TestExtractText:
    """Test cases for reading uploaded resume files"""

    def test_utf8_text(self, tmp_path):
        path = tmp_path / "resume.txt"
        path.write_bytes("Zoë Müller\n\n\n\nPython   developer\r\n".encode("utf-8"))

        assert extract_text(str(path), "resume.txt") == "Zoë Müller\n\nPython developer"

    def test_legacy_encoding_text(self, tmp_path):
        path = tmp_path / "resume.txt"
        path.write_bytes("José García\nSoftware Engineer, Málaga".encode("cp1252"))

        text = extract_text(str(path), "resume.txt")

        assert text.startswith("José García")
        assert "Málaga" in text

    def test_binary_bytes_rejected(self, tmp_path):
        path = tmp_path / "upload.bin"
        path.write_bytes(bytes(range(256)) * 4)

        with pytest.raises(ProcessingError) as exc_info:
            extract_text(str(path), "resume.txt")
        assert "not readable text" in exc_info.value.message
        assert exc_info.value.details["filename"] == "resume.txt"

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "resume.rtf"
        path.write_text("{\\rtf1 John Doe}")

        with pytest.raises(ValidationError):
            extract_text(str(path), "resume.rtf")


class TestLooksBinary:

    def test_plain_text(self):
        assert not looks_binary("John Doe\tjohn@example.com\r\nPython, SQL\n")

    def test_pdf_page_breaks_allowed(self):
        assert not looks_binary("Page one text of a resume\x0cPage two text of a resume")

    def test_control_heavy_text(self):
        assert looks_binary("\x00\x01\x02abc\x03\x04")

    def test_empty(self):
        assert not looks_binary("")
