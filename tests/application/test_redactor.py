from kurl.application.services.redactor import mask_pairs, mask_value


class TestMaskValue:
    def test_mask_authorization(self):
        assert mask_value("Authorization", "Bearer token123") == "********"

    def test_mask_cookie_headers(self):
        assert mask_value("cookie", "session=abc123") == "********"
        assert mask_value("Set-Cookie", "session=xyz789") == "********"
        assert mask_value("PROXY-AUTHORIZATION", "Basic x") == "********"

    def test_no_mask_regular_header(self):
        assert mask_value("Accept", "*/*") == "*/*"

    def test_mask_none_value(self):
        assert mask_value("cookie", None) is None


class TestMaskCollections:
    def test_mask_pairs_keeps_order_and_duplicates(self):
        pairs = [("Accept", "a"), ("Cookie", "x=1"), ("Accept", "b")]
        assert mask_pairs(pairs) == [("Accept", "a"), ("Cookie", "********"), ("Accept", "b")]
