"""Module with a parent class of all data structures."""

from dataclasses import asdict, dataclass

import numpy as np

__all__ = ["DataBase"]


@dataclass(eq=False)
class DataBase:
    """Base class of all data structures.

    Defines basic methods shared by all data structures.
    """

    # Enumerated attributes as (key, enum class) pairs
    _enum_attrs = ()

    # Fixed-length attributes as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Variable-length attributes as (key, dtype) pairs
    _var_length_attrs = ()

    # Attributes specifying coordinates
    _pos_attrs = ()

    # Attributes specifying vector components
    _vec_attrs = ()

    # Index attributes
    _index_attrs = ()

    # Attributes that must never be stored to file
    _skip_attrs = ()

    # Euclidean axis labels
    _axes = ("x", "y", "z")

    def __post_init__(self):
        """Immediately called after building the class attributes.

        Gives default values to array-like attributes and casts array-likes
        provided as lists to numpy arrays. If a default array was provided in
        the attribute definition, all instances of this class would point to
        the same memory location.
        """
        # Provide default values to the variable-length array attributes
        for attr, dtype in self._var_length_attrs:
            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, np.empty(0, dtype=dtype))
            else:
                setattr(self, attr, np.asarray(value, dtype=dtype))

        # Provide default values to the fixed-length array attributes
        for attr, size in self._fixed_length_attrs:
            dtype = np.float64
            if isinstance(size, tuple):
                size, dtype = size

            value = getattr(self, attr)
            if value is None:
                setattr(self, attr, np.full(size, -np.inf, dtype=dtype))
            else:
                value = np.asarray(value, dtype=dtype)
                assert value.shape == (size,), (
                    f"The `{attr}` attribute of `{self.__class__.__name__}` "
                    f"must be of length {size}, got shape {value.shape}."
                )
                setattr(self, attr, value)

        # Cast enumerated attributes to their enumerated type
        for attr, enum in self._enum_attrs:
            setattr(self, attr, enum(getattr(self, attr)))

    def __eq__(self, other):
        """Checks that all attributes of two class instances are the same.

        This overloads the default dataclass `__eq__` method to include an
        appopriate check for vector (numpy) attributes.

        Parameters
        ----------
        other : obj
            Other instance of the same object class

        Returns
        -------
        bool
            `True` if all attributes of both objects are identical
        """
        if self.__class__ != other.__class__:
            return False

        for k, v in self.__dict__.items():
            v_other = getattr(other, k)
            if np.isscalar(v):
                if v_other != v:
                    return False

            elif v.shape != v_other.shape or (v_other != v).any():
                return False

        return True

    def as_dict(self):
        """Returns the data class as dictionary of (key, value) pairs.

        Returns
        -------
        dict
            Dictionary of attribute names and their values
        """
        return {k: v for k, v in asdict(self).items() if k not in self._skip_attrs}

    def scalar_dict(self, attrs=None):
        """Returns the data class attributes as a dictionary of scalars.

        This is useful when storing data classes in CSV files, which expect
        a single scalar per column in the table. Positions and vectors are
        expanded along the Euclidean axes, other fixed-length arrays along
        their index. Variable-length arrays are not stored.

        Parameters
        ----------
        attrs : List[str], optional
            List of attribute names to include in the dictionary. If not
            specified, all the keys are included.

        Returns
        -------
        dict
            Dictionary of scalar attributes
        """
        scalar_dict, found = {}, []
        fixed_attrs = dict(self._fixed_length_attrs)
        for attr, value in self.as_dict().items():
            if attrs is not None and attr not in attrs:
                continue
            found.append(attr)

            if np.isscalar(value):
                scalar_dict[attr] = value

            elif attr in (self._pos_attrs + self._vec_attrs):
                for i, v in enumerate(value):
                    scalar_dict[f"{attr}_{self._axes[i]}"] = v

            elif attr in fixed_attrs:
                for i, v in enumerate(value):
                    scalar_dict[f"{attr}_{i}"] = v

            else:
                # Variable-length arrays have no fixed number of columns
                assert attrs is None or attr not in attrs, (
                    f"Cannot cast {attr} to scalars, it is a variable-length "
                    "array attribute."
                )

        if attrs is not None and len(attrs) != len(found):
            miss = list(set(attrs).difference(set(found)))
            raise AttributeError(
                f"Attribute(s) {miss} do(es) not appear in "
                f"{self.__class__.__name__}."
            )

        return scalar_dict
