"""Shared fixtures: small OpenAPI documents exercising the generator.

Each fixture returns a fresh dict so tests may mutate it freely.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest

from sdkgen.loader import dereference, stamp_schema_origins


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

WIDGETS_SPEC: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Widgets", "version": "1.0.0"},
    "paths": {
        "/v1/widgets": {
            "get": {
                "summary": "List all widgets",
                "description": "Lists every widget of the current account.",
                "responses": {
                    "default": {
                        "description": "A page of widgets",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "object": {"type": "string", "enum": ["list"]},
                                        "data": {
                                            "type": "array",
                                            "items": {"$ref": "#/components/schemas/Widget"},
                                        },
                                    },
                                },
                            }
                        },
                    }
                },
            }
        }
    },
    "components": {
        "schemas": {
            "Widget": {
                "title": "Widget",
                "properties": {"id": {"type": "string"}},
            }
        }
    },
}

DEVICES_SPEC: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Devices", "version": "1.0.0"},
    "paths": {
        "/v1/devices": {
            "get": {
                "operationId": "listDevices",
                "summary": "List all devices",
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "number"}},
                    {"name": "cursor", "in": "query", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "default": {
                        "description": "Devices",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {
                                        "object": {"type": "string", "enum": ["list"]},
                                        "data": {
                                            "type": "array",
                                            "items": {"$ref": "#/components/schemas/Device"},
                                        },
                                        "has_more": {"type": "boolean"},
                                    },
                                },
                            }
                        },
                    }
                },
            },
            "post": {
                "summary": "Create a device",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "name": {"type": "string", "description": "Display name."},
                                    "owner": {"$ref": "#/components/schemas/Member"},
                                },
                                "required": ["name"],
                            }
                        }
                    }
                },
                "responses": {
                    "default": {
                        "description": "The device",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Device"}}
                        },
                    }
                },
            },
        },
        "/v1/devices/{id}": {
            "parameters": [],
            "get": {
                "summary": "Retrieve a device",
                "parameters": [
                    {
                        "name": "id",
                        "in": "path",
                        "required": True,
                        "description": "Unique ID of the device",
                        "schema": {"type": "string"},
                    }
                ],
                "responses": {
                    "default": {
                        "description": "The device",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Device"}}
                        },
                    }
                },
            },
            "delete": {
                "summary": "Delete a device",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}
                ],
                "responses": {
                    "default": {
                        "description": "The deleted device",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Device"}}
                        },
                    }
                },
            },
        },
        "/v1/members/{id}": {
            "get": {
                "summary": "Retrieve a member",
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}
                ],
                "responses": {
                    "default": {
                        "description": "The member",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Member"}}
                        },
                    }
                },
            }
        },
        "/v1/ping": {
            "get": {
                "summary": "Ping the API",
                "responses": {
                    "default": {
                        "description": "Pong",
                        "content": {"text/plain": {"schema": {"type": "string"}}},
                    }
                },
            }
        },
    },
    "components": {
        "schemas": {
            "Device": {
                "title": "Device",
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Unique ID of the device."},
                    "name": {"type": "string"},
                    "battery": {"type": "number"},
                    "online": {"type": "boolean"},
                    "owner": {"$ref": "#/components/schemas/Member"},
                    "primary_contact": {"$ref": "#/components/schemas/ContactPointDetails"},
                    "contacts": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/ContactPointDetails"},
                    },
                    "settings": {
                        "type": "object",
                        "properties": {"timezone": {"type": "string"}},
                    },
                    "metadata": {"oneOf": [{"type": "string"}, {"type": "number"}]},
                },
                "required": ["id", "name"],
            },
            "Member": {
                "title": "Member",
                "type": "object",
                "properties": {"id": {"type": "string"}, "name": {"type": "string"}},
                "required": ["id"],
            },
            "ContactPointDetails": {
                "title": "Contact Point",
                "type": "object",
                "properties": {
                    "system": {"type": "string"},
                    "value": {"type": "string"},
                },
                "required": ["system", "value"],
            },
        }
    },
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def widgets_spec() -> dict[str, Any]:
    return copy.deepcopy(WIDGETS_SPEC)


@pytest.fixture
def devices_spec() -> dict[str, Any]:
    return copy.deepcopy(DEVICES_SPEC)


@pytest.fixture
def dereferenced_devices(devices_spec) -> dict[str, Any]:
    """The devices document, stamped and dereferenced."""
    return dereference(stamp_schema_origins(devices_spec))


@pytest.fixture
def dereferenced_widgets(widgets_spec) -> dict[str, Any]:
    return dereference(stamp_schema_origins(widgets_spec))
