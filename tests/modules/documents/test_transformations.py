"""
Unit tests for media-host URL transformations.
"""

from licensedesk.modules.documents import DocumentType, Side, apply_transformation, get_transformation

CLOUDINARY_URL = "https://res.cloudinary.com/demo/image/upload/v1712/driving_school/ABC123/x.jpg"


class TestApplyTransformation:
    """Tests for apply_transformation."""

    def test_photo_transformation_inserted_after_upload(self):
        result = apply_transformation(CLOUDINARY_URL, DocumentType.PHOTO)

        assert result == (
            "https://res.cloudinary.com/demo/image/upload/"
            "c_fill,w_400,h_500,q_auto,f_auto,g_face/v1712/driving_school/ABC123/x.jpg"
        )

    def test_signature_differs_from_photo(self):
        """Each slot gets its own preset."""
        signature = apply_transformation(CLOUDINARY_URL, DocumentType.SIGNATURE)
        photo = apply_transformation(CLOUDINARY_URL, DocumentType.PHOTO)

        assert "/upload/c_fill,w_300,h_100,q_auto,f_auto/" in signature
        assert signature != photo

    def test_certificate_preset(self):
        result = apply_transformation(CLOUDINARY_URL, DocumentType.CERTIFICATE)
        assert "/upload/c_limit,w_1200,h_1600,q_auto:good,f_auto/" in result

    def test_front_and_back_share_preset(self):
        front = apply_transformation(CLOUDINARY_URL, DocumentType.AADHAR, Side.FRONT)
        back = apply_transformation(CLOUDINARY_URL, DocumentType.AADHAR, Side.BACK)

        assert front == back
        assert "/upload/c_limit,w_1000,h_700,q_auto:good,f_auto/" in front

    def test_non_media_host_url_unchanged(self):
        url = "https://drive.google.com/uc?id=abc/upload/x"
        assert apply_transformation(url, DocumentType.PHOTO) == url

    def test_url_without_single_upload_segment_unchanged(self):
        no_segment = "https://res.cloudinary.com/demo/image/fetch/x.jpg"
        two_segments = "https://res.cloudinary.com/demo/image/upload/a/upload/x.jpg"

        assert apply_transformation(no_segment, DocumentType.PHOTO) == no_segment
        assert apply_transformation(two_segments, DocumentType.PHOTO) == two_segments

    def test_empty_url_unchanged(self):
        assert apply_transformation("", DocumentType.PHOTO) == ""


class TestGetTransformation:
    """Tests for get_transformation."""

    def test_accepts_wire_names(self):
        assert get_transformation("sslc") == get_transformation(DocumentType.CERTIFICATE)

    def test_unknown_type_gets_default(self):
        assert get_transformation("passport") == "q_auto,f_auto"
