"""Base form for validating JSON request bodies."""

from __future__ import annotations

from typing import Any

from flask import request
from flask_wtf import FlaskForm  # type: ignore
from werkzeug.datastructures import ImmutableMultiDict
from wtforms import BooleanField, Field, IntegerField

from .errors import ValidationError

INVALID_FORMAT = "Format permintaan tidak valid"


class StringListField(Field):
    """A field holding a JSON array of strings."""

    def process_formdata(self, valuelist):
        """Keep every non-empty string of the submitted array."""
        self.data = [str(v) for v in valuelist if v not in (None, "")]

    def _value(self):
        return ",".join(self.data or [])


def accepts_json(field: Field, value: Any) -> bool:
    """Return True if ``value`` has a JSON type ``field`` can hold."""
    if isinstance(field, StringListField):
        return isinstance(value, list) and all(isinstance(v, str) for v in value)
    if isinstance(field, BooleanField):
        return isinstance(value, (bool, int, str))
    if isinstance(field, IntegerField):
        if isinstance(value, bool):
            return False
        if isinstance(value, float):
            return value.is_integer()
        return isinstance(value, (int, str))
    return isinstance(value, str)


class ApiForm(FlaskForm):
    """A FlaskForm fed from a JSON object instead of form data.

    Bearer-token routes carry no CSRF cookie, so CSRF is off. Bodies that
    are not JSON objects, that carry fields the form does not declare, or
    whose values have the wrong JSON type are rejected rather than silently
    coerced.

    ``null`` values count as absent, except for fields named in
    ``nullable_fields``, where an explicit ``null`` is a request to clear.
    """

    class Meta:
        csrf = False

    nullable_fields: tuple[str, ...] = ()
    provided: set[str]

    @classmethod
    def from_json(cls, payload: Any = None, allow_empty: bool = False) -> ApiForm:
        """Build and validate the form, raising ValidationError on failure."""
        if payload is None:
            payload = request.get_json(silent=True)
        if payload is None and allow_empty:
            payload = {}
        if not isinstance(payload, dict):
            raise ValidationError(INVALID_FORMAT)

        present = {k: v for k, v in payload.items() if v is not None}
        form = cls(formdata=None)

        unknown = sorted(set(payload) - set(form._fields))
        if unknown:
            raise ValidationError(f"Field tidak dikenal: {', '.join(unknown)}")
        for name, value in present.items():
            if not accepts_json(form._fields[name], value):
                raise ValidationError(INVALID_FORMAT)

        form.process(ImmutableMultiDict(present))
        if not form.validate():
            raise ValidationError(form.first_error())

        cleared = {
            k for k, v in payload.items() if v is None and k in cls.nullable_fields
        }
        form.provided = set(present) | cleared
        return form

    @classmethod
    def from_multipart(cls) -> ApiForm:
        """Build and validate the form from ``request.form`` and ``request.files``."""
        form = cls()
        if not form.validate():
            raise ValidationError(form.first_error())
        form.provided = {name for name, field in form._fields.items() if field.raw_data}
        return form

    def first_error(self) -> str:
        for errors in self.errors.values():
            if errors:
                return errors[0]
        return "Data tidak valid"

    def provided_data(self) -> dict[str, Any]:
        """Return the cleaned values of the fields present in the body."""
        return {name: self._fields[name].data for name in self.provided}
