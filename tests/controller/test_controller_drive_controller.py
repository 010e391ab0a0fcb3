import unittest
from unittest.mock import Mock, patch

from gdrivefs.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_entry_info,
)
from gdrivefs.errors import ApiError
from gdrivefs.util.mime import FOLDER_MIME


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_entry_info_file(self) -> None:
        data = {
            "id": "F1",
            "name": "n.txt",
            "mimeType": "text/plain",
            "parents": ["P1"],
            "trashed": False,
            "version": "7",
            "size": "123",
            "createdTime": "2025-01-01T00:00:00.000Z",
            "modifiedTime": "2025-01-02T00:00:00.000Z",
            "webContentLink": "https://drive.google.com/uc?id=F1&export=download",
        }
        info = _file_dict_to_entry_info(data)
        self.assertEqual(info.type, "file")
        self.assertEqual(info.id, "F1")
        self.assertEqual(info.size, 123)
        self.assertEqual(info.etag, "7")
        self.assertEqual(info.item_status, "active")
        self.assertEqual(info.parent.id, "P1")
        self.assertEqual(info.created_at, "2025-01-01T00:00:00.000Z")
        self.assertTrue(info.web_content_link.endswith("export=download"))

    def test_file_dict_to_entry_info_trashed_folder(self) -> None:
        data = {"id": "D1", "name": "d", "mimeType": FOLDER_MIME, "trashed": True, "size": "9"}
        info = _file_dict_to_entry_info(data, parent_id="P9")
        self.assertEqual(info.type, "folder")
        self.assertEqual(info.item_status, "trashed")
        self.assertIsNone(info.size)
        self.assertIsNone(info.etag)
        self.assertEqual(info.parent.id, "P9")


class TestDriveControllerMocked(unittest.TestCase):
    def setUp(self) -> None:
        self.service = Mock()
        self.files = Mock()
        self.service.files.return_value = self.files
        self.controller = GoogleDriveController.from_service(self.service)

    def test_list_children_follows_pages(self) -> None:
        first, second = Mock(), Mock()
        first.execute.return_value = {
            "files": [{"id": "A", "name": "a", "mimeType": "text/plain"}],
            "nextPageToken": "T2",
        }
        second.execute.return_value = {
            "files": [{"id": "B", "name": "b", "mimeType": FOLDER_MIME}],
        }
        self.files.list.side_effect = [first, second]

        entries = self.controller.list_children("P1")

        self.assertEqual([e.id for e in entries], ["A", "B"])
        self.assertEqual(entries[1].type, "folder")
        self.assertEqual(entries[0].parent.id, "P1")

        first_kwargs = self.files.list.call_args_list[0].kwargs
        self.assertEqual(first_kwargs["q"], "('P1' in parents) and trashed=false")
        self.assertIsNone(first_kwargs["pageToken"])
        self.assertTrue(first_kwargs["supportsAllDrives"])
        self.assertTrue(first_kwargs["includeItemsFromAllDrives"])
        self.assertEqual(self.files.list.call_args_list[1].kwargs["pageToken"], "T2")

    def test_list_children_without_shared_drives(self) -> None:
        controller = GoogleDriveController.from_service(self.service, supports_all_drives=False)
        req = Mock()
        req.execute.return_value = {"files": []}
        self.files.list.return_value = req

        controller.list_children("P1", include_trashed=True)

        kwargs = self.files.list.call_args.kwargs
        self.assertEqual(kwargs["q"], "'P1' in parents")
        self.assertNotIn("supportsAllDrives", kwargs)

    def test_http_404_becomes_api_error_with_status(self) -> None:
        from googleapiclient.errors import HttpError

        resp = Mock()
        resp.status = 404
        resp.reason = "Not Found"
        req = Mock()
        req.execute.side_effect = HttpError(resp=resp, content=b"{}")
        self.files.update.return_value = req

        with self.assertRaises(ApiError) as ctx:
            self.controller.update("X", {"name": "y"})
        self.assertEqual(ctx.exception.details["status_code"], 404)

    def test_errors_are_not_retried(self) -> None:
        req = Mock()
        req.execute.side_effect = OSError("connection reset")
        self.files.delete.return_value = req

        with self.assertRaises(ApiError):
            self.controller.delete("X")
        self.assertEqual(req.execute.call_count, 1)

    def test_ranged_download_sets_range_header(self) -> None:
        req = Mock()
        req.headers = {}
        req.execute.return_value = b"el"
        self.files.get_media.return_value = req

        data = self.controller.download("F1", start=1, end=3)

        self.assertEqual(data, b"el")
        self.assertEqual(req.headers["Range"], "bytes=1-2")

    def test_open_ended_range(self) -> None:
        req = Mock()
        req.headers = {}
        req.execute.return_value = b"lo"
        self.files.get_media.return_value = req

        self.controller.download("F1", start=3)

        self.assertEqual(req.headers["Range"], "bytes=3-")

    def test_full_download_streams_chunks(self) -> None:
        self.files.get_media.return_value = Mock()

        def fake_downloader(fd, request):
            chunks = iter([b"hel", b"lo"])
            downloader = Mock()

            def next_chunk():
                fd.write(next(chunks))
                return None, fd.tell() == 5

            downloader.next_chunk.side_effect = next_chunk
            return downloader

        with patch("googleapiclient.http.MediaIoBaseDownload", side_effect=fake_downloader):
            data = self.controller.download("F1")

        self.assertEqual(data, b"hello")

    def test_upload_new_version(self) -> None:
        req = Mock()
        req.execute.return_value = {"id": "F1", "name": "a", "mimeType": "text/plain", "version": "2"}
        self.files.update.return_value = req
        controller = GoogleDriveController.from_service(self.service, keep_revision_forever=True)

        info = controller.upload_new_version("F1", b"world")

        kwargs = self.files.update.call_args.kwargs
        self.assertEqual(kwargs["fileId"], "F1")
        self.assertTrue(kwargs["keepRevisionForever"])
        self.assertEqual(kwargs["media_body"].size(), 5)
        self.assertFalse(kwargs["media_body"].resumable())
        self.assertEqual(info.etag, "2")

    def test_create_file_and_folder(self) -> None:
        req = Mock()
        req.execute.return_value = {"id": "N1", "name": "n", "mimeType": "text/plain"}
        self.files.create.return_value = req

        self.controller.create_file("P1", "n", b"abc")
        body = self.files.create.call_args.kwargs["body"]
        self.assertEqual(body, {"name": "n", "parents": ["P1"]})

        self.controller.create_folder("P1", "d")
        body = self.files.create.call_args.kwargs["body"]
        self.assertEqual(body, {"name": "d", "mimeType": FOLDER_MIME, "parents": ["P1"]})
        self.assertNotIn("media_body", self.files.create.call_args.kwargs)

    def test_update_metadata(self) -> None:
        req = Mock()
        req.execute.return_value = {"id": "F1", "name": "a", "mimeType": "text/plain"}
        self.files.update.return_value = req

        self.controller.update("F1", {"modifiedTime": "2025-01-01T00:00:00.000000Z"})

        kwargs = self.files.update.call_args.kwargs
        self.assertEqual(kwargs["body"], {"modifiedTime": "2025-01-01T00:00:00.000000Z"})
        self.assertNotIn("keepRevisionForever", kwargs)


if __name__ == "__main__":
    unittest.main()
