"""Swagger/OpenAPI configuration for the application."""
from flask_swagger_ui import get_swaggerui_blueprint

# Swagger UI configuration
SWAGGER_URL = '/api/docs'
API_URL = '/api/swagger.json'

SECURED = [{"bearerAuth": []}]


def get_swagger_blueprint():
    """Create and return swagger UI blueprint."""
    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            'app_name': "Language Academy API",
            'defaultModelsExpandDepth': -1,
            'docExpansion': 'list',
            'filter': True,
            'supportedSubmitMethods': ['get', 'post', 'put', 'delete'],
            'validatorUrl': None,
        }
    )
    return swaggerui_blueprint


def _json_body(schema_ref=None, required=None, properties=None):
    if schema_ref:
        schema = {"$ref": f"#/components/schemas/{schema_ref}"}
    else:
        schema = {"type": "object", "properties": properties or {}}
        if required:
            schema["required"] = required
    return {"required": True, "content": {"application/json": {"schema": schema}}}


def _responses(ok="200", description="Success", errors=(400, 401, 403)):
    responses = {
        ok: {
            "description": description,
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Success"}}}
        }
    }
    for code in errors:
        responses[str(code)] = {
            "description": "Error",
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Error"}}}
        }
    return responses


def _op(tag, summary, body=None, ok="200", secured=True, errors=(400, 401, 403)):
    operation = {"tags": [tag], "summary": summary, "responses": _responses(ok, summary, errors)}
    if body:
        operation["requestBody"] = body
    if secured:
        operation["security"] = SECURED
    return operation


CELL = {
    "type": "object",
    "required": ["day", "hour"],
    "properties": {
        "day": {"type": "integer", "minimum": 0, "maximum": 6, "description": "0 = Sunday"},
        "hour": {"type": "integer", "minimum": 0, "maximum": 23}
    }
}


def generate_swagger_spec():
    """Generate OpenAPI/Swagger specification."""
    return {
        "openapi": "3.0.0",
        "info": {
            "title": "Language Academy API",
            "description": "Weekly schedule, staff availability and level-based program progress",
            "version": "1.0.0"
        },
        "servers": [
            {
                "url": "http://127.0.0.1:5000/api",
                "description": "Development server"
            }
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT"
                }
            },
            "schemas": {
                "User": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "integer"},
                        "email": {"type": "string", "format": "email"},
                        "name": {"type": "string"},
                        "role": {"type": "string", "enum": ["student", "tutor", "teacher", "admin"]},
                        "level": {"type": "string", "enum": ["A1", "A2", "B1", "B2", "C1", "C2"],
                                  "nullable": True}
                    }
                },
                "TimeRange": {
                    "type": "object",
                    "required": ["day_of_week", "start_time", "end_time"],
                    "properties": {
                        "day_of_week": {"type": "integer", "minimum": 0, "maximum": 6},
                        "start_time": {"type": "string", "example": "09:00"},
                        "end_time": {"type": "string", "example": "12:00"}
                    }
                },
                "ScheduleEvent": {
                    "type": "object",
                    "required": ["title", "day_of_week", "start_time", "end_time"],
                    "properties": {
                        "title": {"type": "string"},
                        "event_type": {"type": "string",
                                       "enum": ["class", "tutoring", "activity", "exam", "break"]},
                        "day_of_week": {"type": "integer", "minimum": 0, "maximum": 6},
                        "start_time": {"type": "string", "example": "09:00"},
                        "end_time": {"type": "string", "example": "10:30"},
                        "level": {"type": "string", "nullable": True},
                        "room_id": {"type": "integer", "nullable": True},
                        "teacher_ids": {"type": "array", "items": {"type": "integer"}, "maxItems": 2},
                        "tutor_ids": {"type": "array", "items": {"type": "integer"}, "maxItems": 2},
                        "description": {"type": "string"},
                        "color": {"type": "string"},
                        "attachment_url": {"type": "string"}
                    }
                },
                "Error": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean"},
                        "message": {"type": "string"},
                        "status_code": {"type": "integer"}
                    }
                },
                "Success": {
                    "type": "object",
                    "properties": {
                        "error": {"type": "boolean", "default": False},
                        "message": {"type": "string"},
                        "data": {"type": "object"}
                    }
                }
            }
        },
        "paths": {
            "/auth/login": {
                "post": _op("Authentication", "User login", _json_body(
                    required=["email", "password"],
                    properties={"email": {"type": "string"}, "password": {"type": "string"}}
                ), secured=False, errors=(400, 401))
            },
            "/auth/refresh": {"post": _op("Authentication", "Refresh access token", errors=(401,))},
            "/auth/me": {"get": _op("Authentication", "Current user profile", errors=(401,))},
            "/auth/users": {
                "get": _op("Authentication", "List users"),
                "post": _op("Authentication", "Create user", _json_body(
                    required=["email", "password", "name"],
                    properties={
                        "email": {"type": "string"}, "password": {"type": "string"},
                        "name": {"type": "string"}, "role": {"type": "string"},
                        "level": {"type": "string"}
                    }
                ), ok="201")
            },
            "/auth/users/{user_id}/level": {
                "put": _op("Authentication", "Assign student level", _json_body(
                    required=["level"], properties={"level": {"type": "string", "nullable": True}}
                ))
            },
            "/availability": {
                "get": _op("Availability", "Own availability"),
                "put": _op("Availability", "Replace availability from selected cells", _json_body(
                    required=["slots"], properties={"slots": {"type": "array", "items": CELL}}
                )),
                "delete": _op("Availability", "Clear availability")
            },
            "/availability/{user_id}": {"get": _op("Availability", "Availability of a staff member")},
            "/availability/ranges": {
                "post": _op("Availability", "Add a time range", _json_body("TimeRange"), ok="201")
            },
            "/schedules": {
                "get": _op("Schedules", "List visible events"),
                "post": _op("Schedules", "Create event", _json_body("ScheduleEvent"), ok="201")
            },
            "/schedules/weekly": {"get": _op("Schedules", "Weekly grid with event placement")},
            "/schedules/quick-create": {
                "post": _op("Schedules", "Create events from a drag selection", _json_body(
                    required=["anchor", "cursor", "title"],
                    properties={"anchor": CELL, "cursor": CELL, "title": {"type": "string"},
                                "event_type": {"type": "string"}, "level": {"type": "string"},
                                "room_id": {"type": "integer"}}
                ), ok="201")
            },
            "/schedules/export": {"get": _op("Schedules", "Export events as CSV or Excel")},
            "/schedules/{event_id}": {
                "get": _op("Schedules", "Event details"),
                "put": _op("Schedules", "Update event", _json_body("ScheduleEvent")),
                "delete": _op("Schedules", "Delete event")
            },
            "/schedules/{event_id}/students": {
                "get": _op("Schedules", "Assigned students"),
                "post": _op("Schedules", "Assign students", _json_body(
                    required=["student_ids"],
                    properties={"student_ids": {"type": "array", "items": {"type": "integer"}}}
                ))
            },
            "/schedules/{event_id}/students/{student_id}": {
                "delete": _op("Schedules", "Remove student from event")
            },
            "/rooms": {
                "get": _op("Rooms", "List rooms"),
                "post": _op("Rooms", "Create room", _json_body(
                    required=["name"],
                    properties={"name": {"type": "string"}, "capacity": {"type": "integer"}}
                ), ok="201")
            },
            "/rooms/{room_id}": {
                "get": _op("Rooms", "Room details"),
                "put": _op("Rooms", "Update room"),
                "delete": _op("Rooms", "Deactivate room")
            },
            "/curriculum/weeks": {
                "get": _op("Curriculum", "List program weeks"),
                "post": _op("Curriculum", "Create program week", ok="201")
            },
            "/curriculum/weeks/{week_number}": {
                "get": _op("Curriculum", "Week with topics"),
                "put": _op("Curriculum", "Update week")
            },
            "/curriculum/weeks/{week_number}/topics": {
                "post": _op("Curriculum", "Add topic", ok="201")
            },
            "/curriculum/topics/{topic_id}": {
                "put": _op("Curriculum", "Update topic"),
                "delete": _op("Curriculum", "Delete topic")
            },
            "/progress/me": {"get": _op("Progress", "Own program overview")},
            "/progress/students/{student_id}": {"get": _op("Progress", "Student program overview")},
            "/progress/students/{student_id}/weeks/{week_number}": {
                "put": _op("Progress", "Mark week completed", _json_body(
                    required=["is_completed"],
                    properties={"is_completed": {"type": "boolean"}, "notes": {"type": "string"}}
                ))
            },
            "/progress/students/{student_id}/topics/{topic_id}": {
                "put": _op("Progress", "Update topic status or color", _json_body(
                    properties={
                        "status": {"type": "string",
                                   "enum": ["not_started", "in_progress", "needs_review", "completed"]},
                        "color": {"type": "string", "nullable": True,
                                  "enum": ["green", "yellow", "orange", "blue", "purple", "red"]}
                    }
                ))
            },
            "/progress/students/{student_id}/points": {"get": _op("Progress", "Points history")},
            "/staff-hours": {"get": _op("Staff hours", "Hours of every teacher and tutor")},
            "/staff-hours/me": {"get": _op("Staff hours", "Own weekly hours")},
            "/staff-hours/recalculate": {"post": _op("Staff hours", "Recalculate from schedule")},
            "/staff-hours/{user_id}/adjustment": {
                "put": _op("Staff hours", "Set manual adjustment", _json_body(
                    required=["hours"], properties={"hours": {"type": "number"}}
                ))
            },
            "/staff-hours/export": {"get": _op("Staff hours", "Export as CSV or Excel")},
            "/feature-flags": {"get": _op("Feature flags", "List feature flags")},
            "/feature-flags/{feature_key}": {
                "put": _op("Feature flags", "Enable or disable a feature", _json_body(
                    required=["is_enabled"], properties={"is_enabled": {"type": "boolean"}}
                ))
            }
        }
    }
