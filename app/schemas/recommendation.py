from marshmallow import Schema, fields, validate

from app.schemas.video import VideoSchema


class FeedQuerySchema(Schema):
    page = fields.Integer(load_default=1, validate=validate.Range(min=1), metadata={'description': 'Page (1-based)'})
    limit = fields.Integer(load_default=20, validate=validate.Range(min=1, max=100), metadata={'description': 'Page size'})


class TrendingQuerySchema(Schema):
    limit = fields.Integer(load_default=10, validate=validate.Range(min=1, max=100), metadata={'description': 'Number of videos'})


class PreferencesRequestSchema(Schema):
    selected_tags = fields.List(
        fields.String(),
        required=True,
        validate=validate.Length(min=1, error="Select at least one tag."),
        metadata={'description': 'Catalog tags the user is interested in'}
    )


class RecommendedVideoSchema(VideoSchema):
    recommendation_score = fields.Float(allow_none=True)


class TagScoreSchema(Schema):
    tag = fields.String()
    score = fields.Float()


class FeedSchema(Schema):
    docs = fields.List(fields.Nested(RecommendedVideoSchema))
    total_docs = fields.Integer()
    page = fields.Integer()
    limit = fields.Integer()
    has_next_page = fields.Boolean()
    is_personalized = fields.Boolean()
    feed_type = fields.String(metadata={'description': 'popular | content_based | preference_based | trending_popular'})
    needs_onboarding = fields.Boolean()
    user_top_tags = fields.List(fields.Nested(TagScoreSchema))


class TagCountSchema(Schema):
    tag = fields.String()
    video_count = fields.Integer()


class TagCatalogSchema(Schema):
    tags = fields.List(fields.Nested(TagCountSchema))
    total = fields.Integer()


class PreferencesSchema(Schema):
    selected_tags = fields.List(fields.String())
    has_completed_onboarding = fields.Boolean()


class TrendingSchema(Schema):
    videos = fields.List(fields.Nested(VideoSchema))
    total = fields.Integer()
    window_hours = fields.Integer()
