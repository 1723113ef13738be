from libms.exceptions import BusinessRuleError, NotFound
from libms.extensions import transaction
from libms.models.category import Category
from libms.repositories.category_repo import CategoryRepo
from libms.utils.validators import validate_category_payload


class CategoryService:
    @staticmethod
    def list_categories(page: int, page_size: int):
        return CategoryRepo.page(page, page_size)

    @staticmethod
    def get_category(category_id: str):
        category = CategoryRepo.get(category_id)
        if not category:
            raise NotFound("Category not found.")
        return category

    @staticmethod
    def create_category(data: dict):
        clean = validate_category_payload(data)
        with transaction():
            if CategoryRepo.get_by_name(clean["name"]):
                raise BusinessRuleError(f"Category with name {clean['name']} already exists.")
            category = CategoryRepo.add(Category(name=clean["name"]))
        return category

    @staticmethod
    def update_category(category_id: str, data: dict):
        clean = validate_category_payload(data)
        with transaction():
            category = CategoryService.get_category(category_id)
            if CategoryRepo.get_by_name(clean["name"], exclude_id=category_id):
                raise BusinessRuleError(f"Category with name {clean['name']} already exists.")
            category.name = clean["name"]
        return category

    @staticmethod
    def delete_category(category_id: str):
        with transaction():
            category = CategoryRepo.get(category_id)
            if not category:
                raise NotFound(f"Category with ID {category_id} not found.")
            if CategoryRepo.has_books(category_id):
                raise BusinessRuleError("Cannot delete category with associated books.")
            CategoryRepo.delete(category)
