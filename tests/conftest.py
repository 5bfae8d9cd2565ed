"""
Global pytest configuration and fixtures.
"""

import pytest

from apivalidator.schema import SchemaModel, load_schema
from apivalidator.telemetry import shutdown_telemetry

USERS_SCHEMA = """
title: Users API
resources:
  user:
    type: object
    properties:
      name:
        type: string
      email:
        type: string
    required: [name]
  user_list:
    type: array
    items:
      $ref: "#/resource/user"
  error:
    type: object
    properties:
      message:
        type: string
    required: [message]
  auth_header:
    type: object
    properties:
      authorization:
        type: string
        pattern: "^Bearer "
    required: [authorization]
  search_params:
    type: object
    properties:
      q:
        type: string
      page:
        type: string
        pattern: "^[0-9]+$"
    required: [q]
routes:
  - name: createUser
    route: /users
    method: POST
    request:
      header: auth_header
      body: user
    responses:
      201:
        body: user
      default:
        body: error
  - name: searchUsers
    route: /users
    method: GET
    request:
      parameter: search_params
    responses:
      200:
        body: user_list
  - name: importUsers
    route: /users/import
    method: POST
    request:
      body: user_list
      encoding: json
  - name: updateUser
    route: /users/{id}
    method: PUT
    request:
      body: user
      encoding:
        application/json: json
        application/vnd.users+json: json
        text/csv: csv
  - name: uploadAvatar
    route: /users/{id}/avatar
    method: PUT
    request:
      header: auth_header
"""


@pytest.fixture
def users_schema() -> SchemaModel:
    """The Users API schema used across validator tests."""
    return load_schema(USERS_SCHEMA)


@pytest.fixture(autouse=True)
def reset_telemetry():
    """Make sure no test leaks telemetry configuration into another."""
    yield
    shutdown_telemetry()
