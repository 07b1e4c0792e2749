"""
Database models for the veterinary clinic backend.

The ownership chain runs client (a :class:`User` with the ``client`` role)
→ :class:`Pet` → :class:`Consultation` → lab tests, treatments and
prescriptions.  Vaccinations, dewormings and appointments hang directly off
a pet.  Every foreign key cascades so deleting a parent removes the whole
subtree below it.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class TimestampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class User(AbstractUser):
    """Clinic account.

    Pet owners carry the ``client`` role and staff the ``admin`` role.  The
    role is only ever set at creation time; none of the update endpoints
    accept it.
    """
    ROLE_CLIENT = 'client'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_CLIENT, 'Client'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    name = models.CharField(max_length=255, blank=True)
    email = models.EmailField(unique=True, null=True, blank=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    address = models.TextField(blank=True, null=True)
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_CLIENT, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def is_admin(self) -> bool:
        return self.role == self.ROLE_ADMIN

    def save(self, *args, **kwargs):
        # E-mail is unique when present; blank addresses are stored as NULL
        if not self.email:
            self.email = None
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Pet(TimestampedModel):
    SPECIES_CHOICES = [
        ('canine', 'Canine'),
        ('feline', 'Feline'),
    ]
    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name='pets')
    name = models.CharField(max_length=255)
    age = models.PositiveSmallIntegerField(validators=[MaxValueValidator(50)])
    species = models.CharField(max_length=10, choices=SPECIES_CHOICES, db_index=True)
    breed = models.CharField(max_length=255)
    colormark = models.CharField(max_length=255)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self) -> str:
        return f"{self.name} ({self.species})"


class Consultation(TimestampedModel):
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='consultations')
    consultation_date = models.DateField()
    weight = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(999.99)],
    )
    temperature = models.DecimalField(
        max_digits=4, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(99.99)],
    )
    complaint = models.TextField(blank=True, null=True)
    diagnosis = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-consultation_date', '-id']

    def __str__(self) -> str:
        return f"Consultation {self.id} for pet {self.pet_id} on {self.consultation_date}"


class Labtest(TimestampedModel):
    LAB_TYPE_CHOICES = [
        ('cbc', 'Complete blood count'),
        ('microscopy', 'Microscopy'),
        ('bloodchem', 'Blood chemistry'),
        ('ultrasound', 'Ultrasound'),
        ('xray', 'X-ray'),
    ]
    consultation = models.ForeignKey(Consultation, on_delete=models.CASCADE, related_name='labtests')
    lab_types = models.CharField(max_length=20, choices=LAB_TYPE_CHOICES)
    # Storage paths of the uploaded result images
    photo_result = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-created_at', '-id']


class Treatment(TimestampedModel):
    TREATMENT_TYPE_CHOICES = [
        ('medicine', 'Medicine'),
        ('surgery', 'Surgery'),
        ('confinement', 'Confinement'),
    ]
    consultation = models.ForeignKey(Consultation, on_delete=models.CASCADE, related_name='treatments')
    treatment_type = models.CharField(max_length=20, choices=TREATMENT_TYPE_CHOICES)
    meds_name = models.CharField(max_length=255, blank=True, null=True)
    treatment_details = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-created_at', '-id']


class Prescription(TimestampedModel):
    consultation = models.ForeignKey(Consultation, on_delete=models.CASCADE, related_name='prescriptions')
    upload_photo = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-created_at', '-id']


class Vaccination(TimestampedModel):
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='vaccinations')
    date = models.DateField()
    weight = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True,
                                 validators=[MinValueValidator(0)])
    temperature = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True,
                                      validators=[MinValueValidator(0)])

    class Meta:
        ordering = ['-date', '-id']


class VacTreatment(TimestampedModel):
    vaccination = models.ForeignKey(Vaccination, on_delete=models.CASCADE, related_name='treatments')
    treatment = models.CharField(max_length=255)
    dose = models.CharField(max_length=255)

    class Meta:
        ordering = ['id']


class Deworming(TimestampedModel):
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='dewormings')
    date = models.DateField()
    weight = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True,
                                 validators=[MinValueValidator(0)])
    temperature = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True,
                                      validators=[MinValueValidator(0)])

    class Meta:
        ordering = ['-date', '-id']


class DewormTreatment(TimestampedModel):
    deworming = models.ForeignKey(Deworming, on_delete=models.CASCADE, related_name='treatments')
    treatment = models.CharField(max_length=255)

    class Meta:
        ordering = ['id']


class Appointment(TimestampedModel):
    TYPE_CHOICES = [
        ('consultation', 'Consultation'),
        ('vaccine', 'Vaccine'),
        ('deworming', 'Deworming'),
    ]
    client = models.ForeignKey(User, on_delete=models.CASCADE, related_name='appointments')
    pet = models.ForeignKey(Pet, on_delete=models.CASCADE, related_name='appointments')
    # Stored in UTC; rendered in the clinic's zone
    appointment_date = models.DateTimeField(db_index=True)
    types = models.CharField(max_length=20, choices=TYPE_CHOICES)

    class Meta:
        ordering = ['-appointment_date', '-id']

    def __str__(self) -> str:
        return f"{self.types} for pet {self.pet_id} at {self.appointment_date.isoformat()}"
