import logging
from typing import Any, Dict, List

from cfncompose.models.errors import Collision, TemplateCollision
from cfncompose.models.template import Template

logger = logging.getLogger(__name__)


def _merge_collection(
    collection: str,
    source: Dict[str, Any],
    destination: Dict[str, Any],
    collisions: List[Collision],
) -> None:
    for name, value in source.items():
        if name in destination:
            collisions.append(Collision(collection=collection, name=name))
        else:
            destination[name] = value


def merge_templates(source: Template, destination: Template) -> None:
    """
    Copy every resource, mapping and output of ``source`` into ``destination``.

    Names already present in ``destination`` are never overwritten. Once all
    three collections have been walked, any such collisions are raised together
    as TemplateCollision. Non-colliding entries stay merged into
    ``destination`` even when the merge fails.
    """
    collisions: List[Collision] = []

    _merge_collection("Resources", source.resources, destination.resources, collisions)
    _merge_collection("Mappings", source.mappings, destination.mappings, collisions)
    _merge_collection("Outputs", source.outputs, destination.outputs, collisions)

    if collisions:
        logger.error("Failed to update template. The following collisions were found:")
        for c in collisions:
            logger.error(
                "\t%s",
                c.message,
                extra={"collection": c.collection, "logical_name": c.name},
            )
        raise TemplateCollision(collisions)
