"""
Django implementation of ModuleRepository port.
"""
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db.models import Max

from catalog.domain.module_definition import ModuleDefinition
from catalog.infrastructure.models import ModuleDefinition as ModuleModel
from catalog.ports.module_repository import ModuleRepository


class DjangoModuleRepository(ModuleRepository):
    """Django ORM implementation of ModuleRepository."""

    def _to_domain(self, model: ModuleModel) -> ModuleDefinition:
        return ModuleDefinition(
            id=model.id,
            label=model.label,
            description=model.description,
            icon_name=model.icon_name,
        )

    @sync_to_async
    def save(self, module: ModuleDefinition) -> ModuleDefinition:
        model = ModuleModel.objects.filter(id=module.id).first()
        if model is None:
            last = ModuleModel.objects.aggregate(last=Max("position"))["last"]
            model = ModuleModel(id=module.id, position=(last or 0) + 1)
        model.label = module.label
        model.description = module.description
        model.icon_name = module.icon_name
        model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, module_id: str) -> Optional[ModuleDefinition]:
        try:
            return self._to_domain(ModuleModel.objects.get(id=module_id))
        except ModuleModel.DoesNotExist:
            return None

    @sync_to_async
    def find_all(self) -> List[ModuleDefinition]:
        return [self._to_domain(model) for model in ModuleModel.objects.all()]

    @sync_to_async
    def delete(self, module_id: str) -> bool:
        deleted, _ = ModuleModel.objects.filter(id=module_id).delete()
        return deleted > 0
