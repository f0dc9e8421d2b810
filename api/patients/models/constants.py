# patients/models/constants.py
# Opciones comunes de los modelos de pacientes

SEXOS = [
    ('M', 'Masculino'),
    ('F', 'Femenino'),
    ('O', 'Otro'),
]

CONDICION_EDAD = [
    ('H', 'Horas'),
    ('D', 'Días'),
    ('M', 'Meses'),
    ('A', 'Años'),
]
