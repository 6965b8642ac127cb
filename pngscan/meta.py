import logging


class FieldDescriptor(object):
    """Wrapper around field access of a Record: it returns the unpacked value."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.field = field_instance
        self.field.name = field_name

    def __get__(self, instance, type=None):
        if instance is None:
            return self.field

        return instance._values[self.field.name]

    def __set__(self, instance, value):
        raise AttributeError(f'field \'{self.field.name}\' of {instance.__class__.__name__} is read-only')


class FieldBase(object):

    def contribute_to_record(self, cls, name):
        if name in cls._meta.fields:
            raise AttributeError(f'field {name} is already present in class {cls.__name__}')

        setattr(cls, name, FieldDescriptor(self, name))


class Meta(object):
    """Class containing metadata about the record"""

    def __init__(self):
        self.fields = []


class MetaRecord(type):

    def __new__(cls, names, bases, attrs):
        '''Collect the fields in the order they are declared, parents' ones first.'''
        new_attrs = {name: value for name, value in attrs.items() if not hasattr(value, 'contribute_to_record')}
        new_cls = super(MetaRecord, cls).__new__(cls, names, bases, new_attrs)

        new_cls._meta = Meta()
        new_cls._field_instances = {}

        # handle inheritance
        parents = [_ for _ in bases if isinstance(_, MetaRecord)]
        for parent in parents:
            for obj_name in parent._meta.fields:
                new_cls._meta.fields.append(obj_name)
                new_cls._field_instances[obj_name] = parent._field_instances[obj_name]

        for obj_name, obj in attrs.items():
            new_cls.add_to_class(obj_name, obj)

        return new_cls

    def add_to_class(cls, name, value):
        if hasattr(value, 'contribute_to_record'):
            logging.getLogger(__name__).debug('contribute_to_record() found for field \'%s\'' % name)
            value.contribute_to_record(cls, name)
            cls._meta.fields.append(name)
            cls._field_instances[name] = value
