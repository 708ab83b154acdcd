import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import time
import unittest
from unittest import mock

from azkit.core.credentials import (
    StaticTokenCredential,
    get_credential,
    is_token_credential,
)


class TestCredentials(unittest.TestCase):
    def test_static_token(self):
        credential = StaticTokenCredential("abc")
        token = credential.get_token("https://vault.azure.net/.default")
        self.assertEqual(token.token, "abc")
        self.assertGreater(token.expires_on, time.time())
        with self.assertRaises(ValueError):
            StaticTokenCredential("")

    def test_token_type(self):
        credential = get_credential("token", token="abc")
        self.assertIsInstance(credential, StaticTokenCredential)
        with mock.patch.dict(os.environ, {"AZKIT_ACCESS_TOKEN": "from-env"}):
            self.assertEqual(get_credential("token").get_token().token, "from-env")
        with mock.patch.dict(os.environ, {"AZKIT_ACCESS_TOKEN": ""}):
            with self.assertRaises(ValueError):
                get_credential("token")

    def test_missing_arguments(self):
        with self.assertRaises(ValueError):
            get_credential("client_secret", tenant_id="t", client_id="c")
        with self.assertRaises(ValueError):
            get_credential("certificate", tenant_id="t", client_id="c")

    def test_certificate_chain_is_passed_through(self):
        with mock.patch("azure.identity.CertificateCredential") as certificate:
            get_credential(
                "certificate",
                tenant_id="tenant",
                client_id="client",
                certificate_path="/etc/azkit/cert.pem",
                send_certificate_chain=True,
            )
            get_credential(
                "certificate",
                tenant_id="tenant",
                client_id="client",
                certificate_path="/etc/azkit/cert.pem",
            )
        chained, plain = certificate.call_args_list
        self.assertEqual(
            chained.kwargs,
            dict(
                tenant_id="tenant",
                client_id="client",
                certificate_path="/etc/azkit/cert.pem",
                send_certificate_chain=True,
            ),
        )
        self.assertFalse(plain.kwargs["send_certificate_chain"])

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            get_credential("password")

    def test_azure_identity_types(self):
        from azure.identity import AzureCliCredential, ClientSecretCredential

        self.assertIsInstance(get_credential("azure_cli"), AzureCliCredential)
        credential = get_credential(
            "client_secret", tenant_id="tenant", client_id="client", client_secret="s"
        )
        self.assertIsInstance(credential, ClientSecretCredential)
        self.assertTrue(is_token_credential(credential))
        self.assertFalse(is_token_credential(object()))


if __name__ == "__main__":
    unittest.main()
