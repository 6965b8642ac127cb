"""
Core module for the abstraction of a fixed layout structure

"""
import logging
from typing import Dict, List, Tuple

from .meta import MetaRecord
from .exceptions import PNGException


class Record(metaclass=MetaRecord):
    """
    Main class that defines a structure: the fields declared as class attributes
    are read in order by unpack() and the instance keeps only their values.

    A Record is a value: it's not possible to modify its fields and two instances
    are equal if their fields are.

    If the subclass defines a validate() method, it's called after all the fields
    have been read and it must raise in case something is not right.
    """

    def __init__(self, offset=None, **values):
        missing = [_ for _ in self._meta.fields if _ not in values]
        unknown = [_ for _ in values if _ not in self._meta.fields]
        if missing or unknown:
            raise TypeError(f'{self.__class__.__name__}: missing fields {missing}, unknown fields {unknown}')

        self.offset = offset
        self._values = {_: values[_] for _ in self._meta.fields}

    @classmethod
    def get_ordered_fields_name(cls) -> List[str]:
        return cls._meta.fields

    @classmethod
    def get_fields(cls):
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, cls._field_instances[_]) for _ in cls.get_ordered_fields_name()]

    @classmethod
    def get_size(cls) -> int:
        return sum(field.size for _, field in cls.get_fields())

    @property
    def values(self) -> Dict:
        return dict(self._values)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        offset = self.offset
        for name, field in self.get_fields():
            result[name] = (offset, field.size)
            offset = offset + field.size if offset is not None else None

        return result

    def __eq__(self, other):
        if not isinstance(other, self.__class__):
            return NotImplemented

        return self._values == other._values

    def __hash__(self):
        return hash((self.__class__, tuple(self._values.values())))

    def __repr__(self):
        msg = []
        for field_name in self._meta.fields:
            msg.append('%s=%r' % (field_name, self._values[field_name]))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    @classmethod
    def unpack(cls, cursor):
        '''This is one of the main APIs to take care of: its aim is to take the
        binary data at the actual position of the cursor and transform it in the
        representation given by the class.

        The cursor is left just after the last field.
        '''
        logger = logging.getLogger(__name__)
        offset = cursor.position()
        values = {}

        for field_name, field in cls.get_fields():
            logger.debug('unpacking %s.%s' % (cls.__name__, field_name))
            try:
                values[field_name] = field.unpack(cursor)
            except PNGException as e:
                if not e.chain or e.chain[-1] != field_name:
                    e.chain.append(field_name)
                e.chain.append(cls.__name__)
                raise

        instance = cls(offset=offset, **values)

        if hasattr(instance, 'validate'):
            try:
                instance.validate()
            except PNGException as e:
                e.chain.append(cls.__name__)
                raise

        return instance
