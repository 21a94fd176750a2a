from db import db

DEPARTMENT = "department"
GRADUATION_TERM = "graduation_term"

class TaxonomyValueModel(db.Model):
    __tablename__ = "taxonomy_values"
    __table_args__ = (db.UniqueConstraint("kind", "value", name = "uq_taxonomy_kind_value"),)

    id = db.Column(db.Integer, primary_key = True)
    # Which vocabulary the value belongs to (department or graduation_term)
    kind = db.Column(db.String(40), nullable = False, index = True)
    value = db.Column(db.String(120), nullable = False)
    # Removing a value only deactivates it, adding it back reactivates the same row
    active = db.Column(db.Boolean, nullable = False, default = True)

    @classmethod
    def active_values(cls, kind):
        rows = cls.query.filter_by(kind = kind, active = True).order_by(cls.id).all()
        return [row.value for row in rows]

    @classmethod
    def is_active(cls, kind, value):
        return cls.query.filter_by(kind = kind, value = value, active = True).first() is not None
