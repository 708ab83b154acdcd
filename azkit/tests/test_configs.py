import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import unittest
from unittest import mock

import yaml

from azkit import config
from azkit.profile import ProfileRecord


class TestConfig(unittest.TestCase):
    def test_to_bool(self):
        for s in ("yes", "True", "1", "ON", "y"):
            self.assertTrue(config._to_bool(s))
        for s in ("no", "False", "0", "off", ""):
            self.assertFalse(config._to_bool(s))
        with self.assertRaises(ValueError):
            config._to_bool("maybe")
        with self.assertRaises(TypeError):
            config._to_bool(1)

    def test_float_from_env(self):
        with mock.patch.dict(os.environ, {"AZKIT_TEST_SECONDS": "2.5"}):
            self.assertEqual(config._float_from_env("AZKIT_TEST_SECONDS", 1), 2.5)
        with mock.patch.dict(os.environ, {"AZKIT_TEST_SECONDS": "soon"}):
            self.assertEqual(config._float_from_env("AZKIT_TEST_SECONDS", 1), 1)
        with mock.patch.dict(os.environ, {"AZKIT_TEST_SECONDS": "-3"}):
            self.assertEqual(config._float_from_env("AZKIT_TEST_SECONDS", 1), 1)
        self.assertEqual(config._float_from_env("AZKIT_UNSET_SECONDS", 4), 4)

    def test_sdk_moniker(self):
        self.assertEqual(config.SDK_MONIKER, f"azkit/{config.__version__}")


class TestProfileRecord(unittest.TestCase):
    def setUp(self):
        ProfileRecord.clear()
        self.addCleanup(ProfileRecord.clear)

    def test_cannot_instantiate(self):
        with self.assertRaises(RuntimeError):
            ProfileRecord()

    def test_set_is_saved(self):
        ProfileRecord.set(vault_url="https://a.vault.azure.net", tenant_id="t")
        with open(config.PROFILE_FILE) as f:
            content = yaml.safe_load(f)
        self.assertEqual(
            content, {"vault_url": "https://a.vault.azure.net", "tenant_id": "t"}
        )

    def test_none_keeps_and_empty_clears(self):
        ProfileRecord.set(vault_url="https://a.vault.azure.net", client_id="c")
        ProfileRecord.set(vault_url=None, client_id="")
        profile = ProfileRecord.current()
        self.assertEqual(profile.vault_url, "https://a.vault.azure.net")
        self.assertIsNone(profile.client_id)

    def test_unknown_field(self):
        with self.assertRaises(ValueError):
            ProfileRecord.set(password="hunter2")

    def test_resolution_order(self):
        ProfileRecord.set(vault_url="https://profile.vault.azure.net")
        with mock.patch.dict(
            os.environ, {"AZKIT_VAULT_URL": "https://env.vault.azure.net"}
        ):
            self.assertEqual(
                ProfileRecord.vault_url("https://explicit.vault.azure.net"),
                "https://explicit.vault.azure.net",
            )
            self.assertEqual(ProfileRecord.vault_url(), "https://env.vault.azure.net")
        with mock.patch.dict(os.environ, {"AZKIT_VAULT_URL": ""}):
            self.assertEqual(
                ProfileRecord.vault_url(), "https://profile.vault.azure.net"
            )

    def test_subscription_id(self):
        ProfileRecord.set(subscription_id="sub-from-profile")
        with mock.patch.dict(os.environ, {"AZKIT_SUBSCRIPTION_ID": ""}):
            self.assertEqual(ProfileRecord.subscription_id(), "sub-from-profile")
            self.assertEqual(ProfileRecord.subscription_id("explicit"), "explicit")


if __name__ == "__main__":
    unittest.main()
