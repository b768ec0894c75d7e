"""Module with a data class object which represents a cosmic tag."""

from dataclasses import dataclass

import numpy as np

from cosmictag.utils.enums import CosmicTagEnum

from .base import DataBase

__all__ = ["CosmicTag"]


@dataclass(eq=False)
class CosmicTag(DataBase):
    """Outcome of the cosmic classification of one trajectory.

    Attributes
    ----------
    start_point : np.ndarray
        (3) First end point of the trajectory (lowest arc length)
    end_point : np.ndarray
        (3) Second end point of the trajectory (highest arc length)
    tag_id : CosmicTagEnum
        Cosmic tag category
    score : float
        Cosmic score, one of 0, 0.4, 0.5 or 1
    particle_id : int
        ID of the tagged particle, if any
    axis_ids : np.ndarray
        (A) IDs of the principal axes associated with the tagged particle
    """

    start_point: np.ndarray = None
    end_point: np.ndarray = None
    tag_id: int = CosmicTagEnum.NOT_TAGGED
    score: float = 0.0
    particle_id: int = -1
    axis_ids: np.ndarray = None

    # Enumerated attributes
    _enum_attrs = (("tag_id", CosmicTagEnum),)

    # Fixed-length attributes
    _fixed_length_attrs = (("start_point", 3), ("end_point", 3))

    # Variable-length attributes
    _var_length_attrs = (("axis_ids", np.int64),)

    # Attributes specifying coordinates
    _pos_attrs = ("start_point", "end_point")

    # Index attributes
    _index_attrs = ("particle_id", "axis_ids")

    @property
    def tag_name(self):
        """Name of the cosmic tag category.

        Returns
        -------
        str
            Name of the category (e.g. `GEOMETRY_XX`)
        """
        return self.tag_id.name

    @property
    def is_cosmic(self):
        """Whether the trajectory received any cosmic tag."""
        return self.tag_id != CosmicTagEnum.NOT_TAGGED

    def scalar_dict(self, attrs=None):
        """Returns the tag attributes as a dictionary of scalars.

        The tag category is stored as its integer value, followed by its name.

        Parameters
        ----------
        attrs : List[str], optional
            List of attribute names to include in the dictionary

        Returns
        -------
        dict
            Dictionary of scalar attributes
        """
        scalar_dict = super().scalar_dict(attrs)
        if "tag_id" in scalar_dict:
            scalar_dict["tag_id"] = int(self.tag_id)
            scalar_dict["tag_name"] = self.tag_name

        return scalar_dict
