"""Token service tests — issue, verify, subject extraction.

Learn: verify() and extract_user_id() never raise. authenticate() is the
only path the API uses, and it must reject a token whose payload looks
fine but whose signature does not match.
"""

import uuid

import jwt

from todolist.auth.jwt import TokenError, TokenService

SECRET = "unit-test-secret"


def _svc(**kwargs) -> TokenService:
    return TokenService(secret=SECRET, **kwargs)


def test_issue_embeds_subject_and_one_hour_expiry():
    user_id = str(uuid.uuid4())
    token = _svc().issue(user_id)

    payload = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert payload["sub"] == user_id
    assert payload["exp"] - payload["iat"] == 3600


def test_verify_accepts_fresh_token():
    svc = _svc()
    assert svc.verify(svc.issue(str(uuid.uuid4()))) is True


def test_verify_rejects_expired_token():
    svc = _svc()
    token = svc.issue(str(uuid.uuid4()), expires_minutes=-1)
    assert svc.verify(token) is False


def test_verify_rejects_wrong_signature():
    forged = TokenService(secret="someone-else").issue(str(uuid.uuid4()))
    assert _svc().verify(forged) is False


def test_verify_rejects_garbage():
    svc = _svc()
    assert svc.verify("") is False
    assert svc.verify("not.a.token") is False
    assert svc.verify("abc") is False


def test_decode_raises_token_error():
    svc = _svc()
    token = svc.issue(str(uuid.uuid4()), expires_minutes=-1)
    try:
        svc.decode(token)
    except TokenError as e:
        assert "expired" in str(e)
    else:
        raise AssertionError("expected TokenError")


def test_extract_user_id_skips_signature_check():
    user_id = str(uuid.uuid4())
    forged = TokenService(secret="someone-else").issue(user_id)
    assert _svc().extract_user_id(forged) == user_id


def test_extract_user_id_on_malformed_token_is_none():
    svc = _svc()
    assert svc.extract_user_id("garbage") is None
    assert svc.extract_user_id("a.b.c") is None


def test_authenticate_returns_verified_subject_only():
    user_id = str(uuid.uuid4())
    svc = _svc()
    assert svc.authenticate(svc.issue(user_id)) == user_id

    forged = TokenService(secret="someone-else").issue(user_id)
    assert svc.authenticate(forged) is None
