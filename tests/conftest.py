"""Pytest configuration and fixtures."""

import json
import os

import pytest

# Set environment variables before imports
os.environ["TABLE_NAME"] = "wedding-pages-test"
os.environ["STAGE"] = "test"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-bytes"
os.environ["PUBLIC_STORAGE_BASE_URL"] = "https://cdn.example.com/public"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"

PAGE_ID = "page-001"
OTHER_PAGE_ID = "page-999"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for moto."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def dynamodb_table(aws_credentials):
    """Create mocked DynamoDB table."""
    import boto3
    from moto import mock_aws

    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")

        table = dynamodb.create_table(
            TableName="wedding-pages-test",
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
                {"AttributeName": "GSI1PK", "AttributeType": "S"},
                {"AttributeName": "GSI1SK", "AttributeType": "S"},
                {"AttributeName": "GSI2PK", "AttributeType": "S"},
                {"AttributeName": "GSI2SK", "AttributeType": "S"},
            ],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": "GSI1",
                    "KeySchema": [
                        {"AttributeName": "GSI1PK", "KeyType": "HASH"},
                        {"AttributeName": "GSI1SK", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
                {
                    "IndexName": "GSI2",
                    "KeySchema": [
                        {"AttributeName": "GSI2PK", "KeyType": "HASH"},
                        {"AttributeName": "GSI2SK", "KeyType": "RANGE"},
                    ],
                    "Projection": {"ProjectionType": "ALL"},
                },
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        table.wait_until_exists()

        yield table


@pytest.fixture(autouse=True)
def reset_contact_service():
    """Drop the container-level contact service (and its cache) between tests."""
    from weddingpage.services import contact_service

    contact_service._contact_service = None
    yield
    contact_service._contact_service = None


@pytest.fixture
def make_token():
    """Issue signed bearer tokens."""
    from weddingpage.utils.tokens import issue_token

    def _make_token(user_id: str = "user-1", role: str = "user", page_id: str | None = PAGE_ID):
        return issue_token(user_id, role=role, page_id=page_id)

    return _make_token


@pytest.fixture
def user_token(make_token):
    """Token of a user bound to PAGE_ID."""
    return make_token()


@pytest.fixture
def admin_token(make_token):
    """Token of an admin without a bound page."""
    return make_token(user_id="admin-1", role="admin", page_id=None)


@pytest.fixture
def api_gateway_event():
    """Create a sample API Gateway event."""
    def _create_event(
        method: str = "GET",
        path: str = "/",
        query_params: dict | None = None,
        body: dict | str | None = None,
        token: str | None = None,
        headers: dict | None = None,
    ):
        event_headers = {"Content-Type": "application/json"}
        if token:
            event_headers["Authorization"] = f"Bearer {token}"
        event_headers.update(headers or {})

        return {
            "httpMethod": method,
            "path": path,
            "pathParameters": {},
            "queryStringParameters": query_params,
            "body": body if isinstance(body, str) else (
                json.dumps(body) if body is not None else None
            ),
            "headers": event_headers,
            "requestContext": {},
        }

    return _create_event


@pytest.fixture
def make_account(dynamodb_table):
    """Store an account with its index keys."""
    from weddingpage.models.account import Account
    from weddingpage.repositories.account import AccountRepository

    repo = AccountRepository()

    def _make_account(**fields):
        fields.setdefault("username", "couple")
        return repo.save_account(Account(**fields))

    return _make_account


@pytest.fixture
def settings_service(dynamodb_table):
    """PageSettingsService bound to the mocked table."""
    from weddingpage.services.page_settings_service import PageSettingsService

    return PageSettingsService()


class LambdaContext:
    """Mock Lambda context."""

    def __init__(self):
        self.function_name = "test-function"
        self.memory_limit_in_mb = 128
        self.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789:function:test"
        self.aws_request_id = "test-request-id"

    def get_remaining_time_in_millis(self):
        return 30000


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context."""
    return LambdaContext()
