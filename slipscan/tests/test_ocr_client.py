from __future__ import annotations

import httpx
import pytest

from slipscan.runtime.ocr_client import OCRServiceUnavailable, call_ocr_service, save_ocr_text


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def _image(tmp_path):
    image_path = tmp_path / "receipt.jpg"
    image_path.write_bytes(b"\xff\xd8\xff fake jpeg")
    return image_path


def test_call_ocr_service_posts_image_and_returns_full_text(tmp_path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"full_text": "KEELLS\nTOTAL 10.00"})

    text = call_ocr_service(_image(tmp_path), "http://ocr.test/", client=_client(handler))

    assert text == "KEELLS\nTOTAL 10.00"
    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://ocr.test/ocr"
    assert b"receipt.jpg" in seen[0].read()


def test_call_ocr_service_accepts_text_key(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"text": "SHOP"})

    assert call_ocr_service(_image(tmp_path), "http://ocr.test", client=_client(handler)) == "SHOP"


def test_call_ocr_service_returns_empty_text_when_nothing_found(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"detections": []})

    assert call_ocr_service(_image(tmp_path), "http://ocr.test", client=_client(handler)) == ""


def test_call_ocr_service_raises_on_error_status(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="busy")

    with pytest.raises(OCRServiceUnavailable, match="503"):
        call_ocr_service(_image(tmp_path), "http://ocr.test", client=_client(handler))


def test_call_ocr_service_wraps_connection_errors(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(OCRServiceUnavailable) as exc_info:
        call_ocr_service(_image(tmp_path), "http://ocr.test", client=_client(handler))

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_call_ocr_service_rejects_non_json_body(tmp_path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>oops</html>")

    with pytest.raises(OCRServiceUnavailable):
        call_ocr_service(_image(tmp_path), "http://ocr.test", client=_client(handler))


def test_save_ocr_text_uses_image_stem(tmp_path) -> None:
    saved = save_ocr_text("SHOP\nTOTAL 1.00", tmp_path / "receipt.jpg", ocr_dir=tmp_path / "ocr_text")

    assert saved == tmp_path / "ocr_text" / "receipt.txt"
    assert saved.read_text() == "SHOP\nTOTAL 1.00"


def test_save_ocr_text_defaults_to_project_directory(isolated_project_root) -> None:
    saved = save_ocr_text("SHOP", isolated_project_root / "r1.png")

    assert saved.parent == (isolated_project_root / "receipts" / "ocr_text").resolve()
