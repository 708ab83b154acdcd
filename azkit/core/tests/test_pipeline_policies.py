import base64
import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import unittest

from azkit._internal.testing import (
    FakeCredential,
    FakeSession,
    json_response,
    kv_challenge,
)
from azkit.core.exceptions import AzkitError
from azkit.core.pipeline import HTTPPolicy, Pipeline
from azkit.core.policies import (
    BearerTokenPolicy,
    HeadersPolicy,
    KeyVaultChallengePolicy,
    UserAgentPolicy,
    _redact_url,
    parse_challenge,
)

VAULT = "https://myvault.vault.azure.net"


class RecordingPolicy(HTTPPolicy):
    def __init__(self, tag, seen):
        self.tag = tag
        self.seen = seen

    def on_request(self, request):
        self.seen.append(self.tag)


class TestPipeline(unittest.TestCase):
    def test_policies_run_in_order(self):
        seen = []
        session = FakeSession([json_response(200, {})])
        pipeline = Pipeline(
            [RecordingPolicy("a", seen), RecordingPolicy("b", seen)], session=session
        )
        response = pipeline.run("GET", "https://example.com/x", params={"k": "v"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(seen, ["a", "b"])
        self.assertEqual(session.requests[0].url, "https://example.com/x?k=v")

    def test_json_body(self):
        session = FakeSession([json_response(200)])
        Pipeline([], session=session).run(
            "PUT", "https://example.com/x", json={"value": "v"}
        )
        self.assertEqual(session.requests[0].body, b'{"value": "v"}')

    def test_user_agent(self):
        session = FakeSession([json_response(200)])
        Pipeline([UserAgentPolicy(prefix="myapp/1.0")], session=session).run(
            "GET", "https://example.com"
        )
        user_agent = session.requests[0].headers["User-Agent"]
        self.assertTrue(user_agent.startswith("myapp/1.0 azkit/"))
        self.assertIn("Python/", user_agent)

    def test_headers_policy_does_not_override(self):
        session = FakeSession([json_response(200)])
        Pipeline(
            [HeadersPolicy({"x-debug": "1", "Accept": "text/plain"})], session=session
        ).run("GET", "https://example.com", headers={"Accept": "application/json"})
        headers = session.requests[0].headers
        self.assertEqual(headers["x-debug"], "1")
        self.assertEqual(headers["Accept"], "application/json")


class TestBearerTokenPolicy(unittest.TestCase):
    def test_token_is_cached(self):
        credential = FakeCredential()
        session = FakeSession([json_response(200), json_response(200)])
        pipeline = Pipeline(
            [BearerTokenPolicy(credential, "https://management.azure.com/.default")],
            session=session,
        )
        pipeline.run("GET", "https://management.azure.com/a")
        pipeline.run("GET", "https://management.azure.com/b")
        self.assertEqual(len(credential.calls), 1)
        self.assertEqual(
            credential.calls[0][0], ("https://management.azure.com/.default",)
        )
        for request in session.requests:
            self.assertEqual(request.headers["Authorization"], "Bearer token1")

    def test_expiring_token_is_refreshed(self):
        # lifetime below the refresh margin
        credential = FakeCredential(lifetime=10)
        session = FakeSession([json_response(200), json_response(200)])
        pipeline = Pipeline([BearerTokenPolicy(credential, "scope")], session=session)
        pipeline.run("GET", "https://example.com/a")
        pipeline.run("GET", "https://example.com/b")
        self.assertEqual(len(credential.calls), 2)
        self.assertEqual(session.requests[1].headers["Authorization"], "Bearer token2")

    def test_http_is_refused(self):
        credential = FakeCredential()
        pipeline = Pipeline(
            [BearerTokenPolicy(credential, "scope")], session=FakeSession()
        )
        with self.assertRaises(AzkitError):
            pipeline.run("GET", "http://example.com")
        self.assertEqual(credential.calls, [])

    def test_claims_challenge(self):
        claims = '{"access_token":{"nbf":{"essential":true,"value":"1"}}}'
        encoded = base64.urlsafe_b64encode(claims.encode()).decode().rstrip("=")
        challenge = json_response(
            401,
            headers={
                "WWW-Authenticate": (
                    'Bearer authorization_uri="https://login.microsoftonline.com/",'
                    f' error="insufficient_claims", claims="{encoded}"'
                )
            },
        )
        credential = FakeCredential()
        session = FakeSession([challenge, json_response(200, {})])
        pipeline = Pipeline([BearerTokenPolicy(credential, "scope")], session=session)
        response = pipeline.run("GET", "https://management.azure.com/x")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(session.requests), 2)
        self.assertEqual(credential.calls[1], (("scope",), {"claims": claims}))
        self.assertEqual(session.requests[1].headers["Authorization"], "Bearer token2")

    def test_plain_401_is_returned(self):
        session = FakeSession(
            [json_response(401, headers={"WWW-Authenticate": 'Bearer error="x"'})]
        )
        pipeline = Pipeline(
            [BearerTokenPolicy(FakeCredential(), "scope")], session=session
        )
        self.assertEqual(pipeline.run("GET", "https://example.com").status_code, 401)
        self.assertEqual(len(session.requests), 1)


class TestKeyVaultChallengePolicy(unittest.TestCase):
    def test_challenge_discovers_scope(self):
        credential = FakeCredential()
        session = FakeSession(
            [kv_challenge(), json_response(200, {}), json_response(200, {})]
        )
        pipeline = Pipeline([KeyVaultChallengePolicy(credential)], session=session)
        pipeline.run("PUT", f"{VAULT}/secrets/a", json={"value": "s3cr3t"})
        pipeline.run("GET", f"{VAULT}/secrets/a")

        probe, authorized, second = session.requests
        # the unauthenticated probe never carries the secret
        self.assertNotIn("Authorization", probe.headers)
        self.assertFalse(probe.body)
        self.assertEqual(authorized.headers["Authorization"], "Bearer token1")
        self.assertEqual(authorized.body, b'{"value": "s3cr3t"}')
        # the scope is remembered
        self.assertEqual(second.headers["Authorization"], "Bearer token1")
        self.assertEqual(
            credential.calls, [(("https://vault.azure.net/.default",), {})]
        )

    def test_mismatched_challenge_domain(self):
        session = FakeSession([kv_challenge("https://evil.example.com")])
        pipeline = Pipeline(
            [KeyVaultChallengePolicy(FakeCredential())], session=session
        )
        with self.assertRaises(AzkitError):
            pipeline.run("GET", f"{VAULT}/secrets/a")

    def test_unauthenticated_success_is_returned(self):
        session = FakeSession([json_response(200, {"ok": True})])
        credential = FakeCredential()
        pipeline = Pipeline([KeyVaultChallengePolicy(credential)], session=session)
        response = pipeline.run("GET", f"{VAULT}/secrets/a")
        self.assertEqual(response.json(), {"ok": True})
        self.assertEqual(credential.calls, [])


class TestHelpers(unittest.TestCase):
    def test_parse_challenge(self):
        self.assertEqual(
            parse_challenge('Bearer authorization="https://a", Resource="https://b"'),
            {"authorization": "https://a", "resource": "https://b"},
        )
        self.assertEqual(parse_challenge('Basic realm="x"'), {})

    def test_redact_url(self):
        self.assertEqual(
            _redact_url("https://a/b?api-version=7.0&sig=secret&maxresults=2"),
            "https://a/b?api-version=7.0&sig=REDACTED&maxresults=2",
        )
        self.assertEqual(_redact_url("https://a/b"), "https://a/b")


if __name__ == "__main__":
    unittest.main()
