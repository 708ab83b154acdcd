import os
import tempfile

# Set cache dir to a temp dir before importing anything from azkit
tmpdir = tempfile.mkdtemp()
os.environ["AZKIT_CACHE_DIR"] = tmpdir

import unittest
from unittest import mock

from azkit._internal.testing import FakeCredential, FakeSession, json_response
from azkit.core.exceptions import AzkitError, ServerError
from azkit.core.operation import OperationSpec
from azkit.core.polling import PollStatus
from azkit.mgmt import ARMPoller
from azkit.mgmt._parameters import (
    API_VERSION,
    BODY,
    ENDPOINT,
    RESOURCE_GROUP_NAME,
    SUBSCRIPTION_ID,
)
from azkit.mgmt.iotfirmwaredefense import IoTFirmwareDefenseClient
from azkit.mgmt.iotfirmwaredefense.models import Firmware
from azkit.mgmt.machinelearning import AzureMachineLearningWorkspaces

ARM = "https://management.azure.com"
SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
ENDPOINT_PATH = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg/providers"
    "/Microsoft.MachineLearningServices/workspaces/my-ws/onlineEndpoints/ep1"
)
STATUS_URL = f"{ARM}/providers/Microsoft.MachineLearningServices/operations/op1"

# A PUT with a result, to exercise the final GET on the resource.
CREATE_FIRMWARE = OperationSpec(
    name="firmware_create",
    method="PUT",
    url=(
        "{$host}/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
        "/providers/Microsoft.IoTFirmwareDefense/workspaces/ws/firmwares/fw-1"
    ),
    parameters=(ENDPOINT, SUBSCRIPTION_ID, RESOURCE_GROUP_NAME, API_VERSION, BODY),
    responses={200: Firmware, 201: Firmware},
)


def _ml(*answers):
    session = FakeSession(list(answers))
    client = AzureMachineLearningWorkspaces(
        FakeCredential(),
        SUBSCRIPTION,
        endpoint=ARM,
        session=session,
        polling_interval=0,
    )
    return client, session


def _urls(session):
    return [(r.method, r.url.split("?")[0]) for r in session.requests]


class TestARMPoller(unittest.TestCase):
    def test_async_operation(self):
        client, session = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL}),
            json_response(200, {"status": "InProgress"}),
            json_response(200, {"status": "Succeeded"}),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        self.assertIsInstance(poller, ARMPoller)
        self.assertEqual(poller.name, ENDPOINT_PATH)
        self.assertEqual(poller.status(), PollStatus.IN_PROGRESS)
        self.assertIsNone(poller.result())
        self.assertEqual(poller.status(), PollStatus.SUCCEEDED)
        self.assertEqual(
            _urls(session),
            [("DELETE", ARM + ENDPOINT_PATH), ("GET", STATUS_URL), ("GET", STATUS_URL)],
        )

    def test_location_operation(self):
        location = f"{ARM}/providers/Microsoft.MachineLearningServices/results/op1"
        client, session = _ml(
            json_response(202, headers={"Location": location}),
            json_response(202),
            json_response(204),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        self.assertIsNone(poller.result())
        self.assertEqual(
            _urls(session)[1:], [("GET", location), ("GET", location)]
        )

    def test_completed_right_away(self):
        client, session = _ml(json_response(204))
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        self.assertTrue(poller.done())
        self.assertIsNone(poller.result())
        self.assertEqual(len(session.requests), 1)

    def test_retry_after(self):
        client, _ = _ml(
            json_response(
                202, headers={"Azure-AsyncOperation": STATUS_URL, "Retry-After": "7"}
            ),
            json_response(200, {"status": "Running"}, headers={"Retry-After": "3"}),
            json_response(200, {"status": "Succeeded"}),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        with mock.patch("azkit.core.polling.time.sleep") as sleep:
            poller.wait()
        self.assertEqual([c.args[0] for c in sleep.call_args_list], [7, 3])

    def test_failed_operation(self):
        client, _ = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL}),
            json_response(
                200,
                {
                    "status": "Failed",
                    "error": {"code": "Conflict", "message": "endpoint in use"},
                },
            ),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        self.assertEqual(poller.poll(), PollStatus.FAILED)
        with self.assertRaises(AzkitError) as ctx:
            poller.result()
        self.assertIn("endpoint in use", str(ctx.exception))

    def test_failed_operation_with_string_error(self):
        client, _ = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL}),
            json_response(200, {"status": "Failed", "error": "quota exceeded"}),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        self.assertEqual(poller.poll(), PollStatus.FAILED)
        with self.assertRaises(AzkitError) as ctx:
            poller.result()
        self.assertIn("quota exceeded", str(ctx.exception))

    def test_failure_survives_continuation_token(self):
        client, _ = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL}),
            json_response(
                200,
                {
                    "status": "Canceled",
                    "error": {"code": "Quota", "message": "quota exceeded"},
                },
            ),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        with self.assertRaises(AzkitError) as ctx:
            poller.result()
        original = str(ctx.exception)
        self.assertIn("(Quota) quota exceeded", original)

        other, session = _ml()
        resumed = other.online_endpoints.begin_delete(
            "rg", "my-ws", "ep1", continuation_token=poller.continuation_token()
        )
        self.assertEqual(resumed.status(), PollStatus.FAILED)
        with self.assertRaises(AzkitError) as ctx:
            resumed.result()
        self.assertEqual(str(ctx.exception), original)
        self.assertEqual(session.requests, [])

    def test_status_monitor_error(self):
        client, _ = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL}),
            json_response(500, {"error": {"code": "InternalServerError"}}),
        )
        poller = client.online_endpoints.begin_delete("rg", "my-ws", "ep1")
        with self.assertRaises(ServerError):
            poller.result()
        self.assertEqual(poller.status(), PollStatus.FAILED)

    def test_resume_from_continuation_token(self):
        client, _ = _ml(
            json_response(202, headers={"Azure-AsyncOperation": STATUS_URL})
        )
        token = client.online_endpoints.begin_delete(
            "rg", "my-ws", "ep1"
        ).continuation_token()

        other, session = _ml(json_response(200, {"status": "Succeeded"}))
        poller = other.online_endpoints.begin_delete(
            "rg", "my-ws", "ep1", continuation_token=token
        )
        self.assertEqual(session.requests, [])
        self.assertIsNone(poller.result())
        self.assertEqual(_urls(session), [("GET", STATUS_URL)])

        with self.assertRaises(ValueError):
            other.online_endpoints.begin_delete(
                "rg", "my-ws", "ep2", continuation_token=token
            )

    def test_put_fetches_the_final_resource(self):
        session = FakeSession(
            [
                json_response(
                    201,
                    {"name": "fw-1", "properties": {"status": "Pending"}},
                    headers={"Azure-AsyncOperation": STATUS_URL},
                ),
                json_response(200, {"status": "Succeeded"}),
                json_response(200, {"name": "fw-1", "properties": {"status": "Ready"}}),
            ]
        )
        client = IoTFirmwareDefenseClient(
            FakeCredential(), SUBSCRIPTION, endpoint=ARM, session=session
        )
        poller = client.begin_operation(
            CREATE_FIRMWARE,
            result_type=Firmware,
            polling_interval=0,
            resource_group_name="rg",
            body={"properties": {"fileName": "router.bin"}},
        )
        firmware = poller.result()
        self.assertEqual(firmware.properties.status.value, "Ready")
        put, status, final = session.requests
        self.assertEqual(put.method, "PUT")
        self.assertEqual(final.method, "GET")
        self.assertEqual(final.url, put.url)


if __name__ == "__main__":
    unittest.main()
