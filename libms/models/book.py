import uuid

from libms.extensions import db


class Book(db.Model):
    __tablename__ = "books"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_books_quantity_non_negative"),
        db.CheckConstraint("available >= 0", name="ck_books_available_non_negative"),
    )

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(100), nullable=False, index=True)
    author = db.Column(db.String(50), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False, default="")
    isbn = db.Column(db.String(20), nullable=False, index=True)
    published_date = db.Column(db.Date, nullable=True)

    # quantity: owned copies, available: copies that can still be reserved
    quantity = db.Column(db.Integer, nullable=False, default=0)
    available = db.Column(db.Integer, nullable=False, default=0)

    category_id = db.Column(db.String(36), db.ForeignKey("categories.id"), nullable=False, index=True)
    category = db.relationship("Category", back_populates="books")
