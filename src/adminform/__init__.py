"""
adminform - Motor de formularios declarativos para la consola de administración.

Cada pantalla CRUD (usuarios, roles, menús, departamentos, diccionarios,
avisos, configuración) describe sus campos con FieldDescriptor y delega en
AdminForm / GenericForm la carga, validación y envío del registro.
"""

__version__ = "0.1.0"
