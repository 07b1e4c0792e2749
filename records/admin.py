"""
Django admin registrations for the clinic records.

Gives superusers a way to inspect and correct data through ``/admin/``.
Treatment lines are edited inline on their vaccination or deworming.
"""
from django.contrib import admin

from .models import (
    Appointment,
    Consultation,
    DewormTreatment,
    Deworming,
    Labtest,
    Pet,
    Prescription,
    Treatment,
    User,
    VacTreatment,
    Vaccination,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'name', 'email', 'role', 'is_staff', 'created_at')
    list_filter = ('role', 'is_staff')
    search_fields = ('username', 'name', 'email', 'phone')
    exclude = ('password',)


@admin.register(Pet)
class PetAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'species', 'breed', 'age', 'client')
    list_filter = ('species',)
    search_fields = ('name', 'breed', 'client__name', 'client__username')
    raw_id_fields = ('client',)


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('id', 'pet', 'consultation_date', 'weight', 'temperature')
    list_filter = ('consultation_date',)
    raw_id_fields = ('pet',)


@admin.register(Labtest)
class LabtestAdmin(admin.ModelAdmin):
    list_display = ('id', 'consultation', 'lab_types', 'created_at')
    list_filter = ('lab_types',)
    raw_id_fields = ('consultation',)


@admin.register(Treatment)
class TreatmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'consultation', 'treatment_type', 'meds_name', 'created_at')
    list_filter = ('treatment_type',)
    raw_id_fields = ('consultation',)


@admin.register(Prescription)
class PrescriptionAdmin(admin.ModelAdmin):
    list_display = ('id', 'consultation', 'created_at')
    raw_id_fields = ('consultation',)


class VacTreatmentInline(admin.TabularInline):
    model = VacTreatment
    extra = 0


@admin.register(Vaccination)
class VaccinationAdmin(admin.ModelAdmin):
    list_display = ('id', 'pet', 'date')
    raw_id_fields = ('pet',)
    inlines = [VacTreatmentInline]


class DewormTreatmentInline(admin.TabularInline):
    model = DewormTreatment
    extra = 0


@admin.register(Deworming)
class DewormingAdmin(admin.ModelAdmin):
    list_display = ('id', 'pet', 'date')
    raw_id_fields = ('pet',)
    inlines = [DewormTreatmentInline]


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'appointment_date', 'types', 'client', 'pet')
    list_filter = ('types', 'appointment_date')
    raw_id_fields = ('client', 'pet')
