from app.pipeline.normalize import MAX_BODY_CHARS, MAX_LINKS, normalize_request


def test_defaults_for_empty_and_non_mapping_payloads():
    for payload in (None, {}, [], "text", 42):
        req = normalize_request(payload)
        assert req.subject == ""
        assert req.sender_name == ""
        assert req.sender_email == ""
        assert req.body_text == ""
        assert req.links == []
        assert req.platform == "gmail"


def test_bounds_on_body_and_links():
    req = normalize_request(
        {
            "body_text": "x" * (MAX_BODY_CHARS + 500),
            "links": [f"https://e.com/{i}" for i in range(100)],
        }
    )
    assert len(req.body_text) == MAX_BODY_CHARS
    assert len(req.links) == MAX_LINKS
    assert req.links[0] == "https://e.com/0"
    assert req.links[-1] == "https://e.com/29"


def test_malformed_fields_fall_back_to_defaults():
    req = normalize_request(
        {
            "subject": None,
            "sender": "ceo@corp.com",
            "body_text": 12345,
            "links": "https://not-a-list.com",
            "platform": "",
        }
    )
    assert req.subject == ""
    assert req.sender_email == ""
    assert req.body_text == "12345"
    assert req.links == []
    assert req.platform == "gmail"


def test_fields_copied_and_camel_case_body_accepted():
    req = normalize_request(
        {
            "subject": "Invoice",
            "sender": {"name": "Billing", "email": "billing@vendor.io"},
            "bodyText": "Please pay",
            "links": ["https://vendor.io/pay", 7, None, {"u": 1}],
            "platform": "outlook",
        }
    )
    assert req.subject == "Invoice"
    assert req.sender_name == "Billing"
    assert req.sender_email == "billing@vendor.io"
    assert req.body_text == "Please pay"
    assert req.links == ["https://vendor.io/pay", 7, None, {"u": 1}]
    assert req.platform == "outlook"


def test_falsy_scalars_use_defaults():
    req = normalize_request(
        {
            "subject": 0,
            "sender": {"name": False, "email": 0},
            "body_text": 0,
            "platform": 0,
        }
    )
    assert req.subject == ""
    assert req.sender_name == ""
    assert req.sender_email == ""
    assert req.body_text == ""
    assert req.platform == "gmail"
