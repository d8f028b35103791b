'''
The fields written in the body of a Chunk class are only prototypes: every
chunk instance works on its own copy, created the first time it's accessed.

The order the fields are written in the class body is the order they have
on the wire, fields of the base chunks come first.
'''
import copy


class FieldBase(object):

    def create(self, father):
        '''Copy of the prototype owned by father.'''
        field = copy.deepcopy(self)
        field.father = father
        return field


class DeclaredField(object):
    '''Stands in the Chunk class for the prototype named name.'''

    def __init__(self, name, prototype):
        self.name = name
        self.prototype = prototype
        prototype.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self.prototype

        if self.name not in instance.__dict__:
            instance.__dict__[self.name] = self.prototype.create(father=instance)

        return instance.__dict__[self.name]

    def __set__(self, instance, value):
        # assigning to the attribute means assigning to the value of the field
        self.__get__(instance).value = value


class MetaChunk(type):

    def __new__(mcs, name, bases, attrs):
        prototypes = [(_k, _v) for _k, _v in attrs.items() if isinstance(_v, FieldBase)]
        for field_name, _ in prototypes:
            del attrs[field_name]

        cls = super().__new__(mcs, name, bases, attrs)

        wire_order = []
        for base in bases:
            wire_order += [_ for _ in getattr(base, '_fields', []) if _ not in wire_order]

        for field_name, prototype in prototypes:
            if field_name in wire_order:
                raise AttributeError(f'field {field_name} is already present in class {name}')
            setattr(cls, field_name, DeclaredField(field_name, prototype))
            wire_order.append(field_name)

        cls._fields = wire_order

        return cls
