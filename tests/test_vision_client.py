from unittest import mock

import pytest
import requests

from ddl_to_er.src import VisionServiceError, VisionNotConfiguredError
from ddl_to_er.web_app.vision_client import VisionClient, clean_sql_response

IMAGE = "data:image/png;base64,iVBORw0KGgo="


def make_client(api_key="test-key"):
    return VisionClient(api_key=api_key, api_url="https://vision.example/v1/chat/completions",
                        model="vision-model", timeout=5)


def completion(content):
    response = mock.Mock(status_code=200)
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    return response


@pytest.mark.parametrize("content,expected", [
    ("```sql\nCREATE TABLE a (id INT);\n```", "CREATE TABLE a (id INT);"),
    ("```\nCREATE TABLE a (id INT);\n```\n", "CREATE TABLE a (id INT);"),
    ("CREATE TABLE a (id INT);", "CREATE TABLE a (id INT);"),
    (None, ""),
])
def test_clean_sql_response(content, expected):
    assert clean_sql_response(content) == expected


def test_build_payload_carries_image_and_settings():
    payload = make_client().build_payload(IMAGE)

    assert payload["model"] == "vision-model"
    assert payload["messages"][0]["role"] == "system"
    assert "snake_case" in payload["messages"][0]["content"]
    image_part = payload["messages"][1]["content"][1]
    assert image_part["image_url"]["url"] == IMAGE


def test_image_to_sql_returns_cleaned_sql():
    with mock.patch("ddl_to_er.web_app.vision_client.requests.post",
                    return_value=completion("```sql\nCREATE TABLE users (id UUID PRIMARY KEY);\n```")) as post:
        sql = make_client().image_to_sql(IMAGE)

    assert sql == "CREATE TABLE users (id UUID PRIMARY KEY);"
    _, kwargs = post.call_args
    assert kwargs["headers"]["Authorization"] == "Bearer test-key"
    assert kwargs["timeout"] == 5


def test_image_to_sql_requires_api_key():
    with pytest.raises(VisionNotConfiguredError):
        make_client(api_key="").image_to_sql(IMAGE)


def test_image_to_sql_http_error():
    response = mock.Mock(status_code=500, text="boom")
    with mock.patch("ddl_to_er.web_app.vision_client.requests.post", return_value=response):
        with pytest.raises(VisionServiceError) as excinfo:
            make_client().image_to_sql(IMAGE)

    assert excinfo.value.status_code == 500


def test_image_to_sql_transport_error():
    with mock.patch("ddl_to_er.web_app.vision_client.requests.post",
                    side_effect=requests.ConnectionError("down")):
        with pytest.raises(VisionServiceError):
            make_client().image_to_sql(IMAGE)


def test_image_to_sql_malformed_body():
    response = mock.Mock(status_code=200)
    response.json.return_value = {"unexpected": True}
    with mock.patch("ddl_to_er.web_app.vision_client.requests.post", return_value=response):
        with pytest.raises(VisionServiceError):
            make_client().image_to_sql(IMAGE)
