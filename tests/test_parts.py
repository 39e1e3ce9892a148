from presigner.integrations.storage.payloads import extract_tag, is_error_document, unquote_etag
from presigner.services.parts import PartDescriptor, build_complete_manifest, normalize_parts


def test_parts_are_filtered_and_sorted():
    parts = normalize_parts(
        [
            {"part_number": 3, "etag": "c"},
            {"part_number": 1, "etag": "a"},
            {"part_number": 0, "etag": "x"},
            {"part_number": 2, "etag": "b"},
        ]
    )
    assert parts == [PartDescriptor(1, "a"), PartDescriptor(2, "b"), PartDescriptor(3, "c")]


def test_parts_accept_store_spelling_and_strip_quotes():
    parts = normalize_parts([{"PartNumber": "2", "ETag": '"abc"'}, {"part_number": 1.0, "etag": '"def"'}])
    assert parts == [PartDescriptor(1, "def"), PartDescriptor(2, "abc")]


def test_invalid_parts_are_dropped_silently():
    parts = normalize_parts(
        [
            {"part_number": -1, "etag": "neg"},
            {"part_number": 1, "etag": ""},
            {"part_number": 1, "etag": '""'},
            {"part_number": "seven", "etag": "nan"},
            {"part_number": 2.5, "etag": "frac"},
            {"part_number": True, "etag": "bool"},
            "not-a-part",
            None,
            {"etag": "no-number"},
        ]
    )
    assert parts == []


def test_manifest_lists_parts_in_order_with_quoted_etags():
    manifest = build_complete_manifest([PartDescriptor(1, "a"), PartDescriptor(2, "b&c")])
    assert manifest == (
        "<CompleteMultipartUpload>"
        '<Part><PartNumber>1</PartNumber><ETag>"a"</ETag></Part>'
        '<Part><PartNumber>2</PartNumber><ETag>"b&amp;c"</ETag></Part>'
        "</CompleteMultipartUpload>"
    )


def test_extract_tag_reads_flat_documents():
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        "<InitiateMultipartUploadResult><Bucket>media</Bucket><Key>k</Key>"
        "<UploadId>abc-123</UploadId></InitiateMultipartUploadResult>"
    )
    assert extract_tag(xml, "UploadId") == "abc-123"
    assert extract_tag(xml, "uploadid") == "abc-123"
    assert extract_tag(xml, "ETag") == ""
    assert extract_tag(None, "UploadId") == ""


def test_extract_tag_unescapes_quoted_etag():
    xml = "<CompleteMultipartUploadResult><ETag>&quot;9f-3&quot;</ETag></CompleteMultipartUploadResult>"
    assert unquote_etag(extract_tag(xml, "ETag")) == "9f-3"


def test_error_document_detection():
    assert is_error_document("<Error><Code>InternalError</Code></Error>")
    assert not is_error_document("<CompleteMultipartUploadResult/>")
    assert not is_error_document("")
