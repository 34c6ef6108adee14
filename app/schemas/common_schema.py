from functools import lru_cache
from marshmallow import Schema, fields, validate


class ApiResponseSchema(Schema):
    status_code = fields.Integer(data_key='statusCode', metadata={'description': 'HTTP status code'})
    message = fields.String(metadata={'description': 'Message'})
    success = fields.Boolean(metadata={'description': 'statusCode < 400'})


class MessageResponseSchema(ApiResponseSchema):
    data = fields.Dict(allow_none=True, metadata={'description': 'Empty payload'})


@lru_cache(maxsize=None)
def api_response_schema(data_schema, many=False):
    base_name = data_schema.__name__[:-len('Schema')] if data_schema.__name__.endswith('Schema') else data_schema.__name__
    name = f"{base_name}{'List' if many else ''}ResponseSchema"

    return type(name, (ApiResponseSchema,), {
        'data': fields.Nested(data_schema, many=many, allow_none=True)
    })


@lru_cache(maxsize=None)
def page_schema(doc_schema):
    base_name = doc_schema.__name__[:-len('Schema')] if doc_schema.__name__.endswith('Schema') else doc_schema.__name__
    name = f"{base_name}PageSchema"

    return type(name, (Schema,), {
        'docs': fields.List(fields.Nested(doc_schema)),
        'total_docs': fields.Integer(metadata={'description': 'Total matching documents'}),
        'page': fields.Integer(),
        'limit': fields.Integer(),
        'total_pages': fields.Integer(),
        'has_next_page': fields.Boolean()
    })


class PaginationQuerySchema(Schema):
    page = fields.Integer(load_default=1, validate=validate.Range(min=1), metadata={'description': 'Page (1-based)'})
    limit = fields.Integer(load_default=10, validate=validate.Range(min=1, max=100), metadata={'description': 'Page size'})


class OwnerSchema(Schema):
    user_id = fields.String()
    username = fields.String()
    fullname = fields.String()
    avatar = fields.String()
