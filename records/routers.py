"""
URL mappings for the clinic API (mounted under ``/api/``).

Trailing slashes are deliberately omitted; the front-end calls the paths
exactly as written here.
"""
from django.urls import path

from .auth_views import current_user_view, jwt_refresh_view, login_view, logout_view, register_view
from .views import appointments, client_portal, clients, consultations, notifications, pets, users
from .views.dashboard import admin_dashboard
from .views.health import health
from .views.leaves import labtests, prescriptions, treatments
from .views.preventive import dewormings, vaccinations

PET = 'admin/clients/<int:client_id>/pets/<int:pet_id>'
CONSULTATION = PET + '/consultations/<int:consultation_id>'

urlpatterns = [
    # Auth & health
    path('auth/register', register_view, name='register_view'),
    path('auth/login', login_view, name='login_view'),
    path('auth/logout', logout_view, name='logout_view'),
    path('auth/user', current_user_view, name='current_user'),
    path('auth/refresh', jwt_refresh_view, name='jwt_refresh'),
    path('health', health, name='health'),

    # Self-service
    path('user/profile', users.profile, name='user-profile'),
    path('user/username', users.update_username, name='user-username'),
    path('user/email', users.update_email, name='user-email'),
    path('user/password', users.update_password, name='user-password'),
    path('user/pets', users.my_pets, name='user-pets'),

    # Pet owners
    path('client/pets', client_portal.my_pets, name='client-pets'),
    path('client/pets/<int:pet_id>', client_portal.my_pet, name='client-pet'),
    path('client/pets/<int:pet_id>/consultations', client_portal.my_pet_consultations,
         name='client-pet-consultations'),
    path('client/pets/<int:pet_id>/vaccinations', client_portal.my_pet_vaccinations,
         name='client-pet-vaccinations'),
    path('client/pets/<int:pet_id>/dewormings', client_portal.my_pet_dewormings, name='client-pet-dewormings'),

    # Role-scoped listings
    path('pets', pets.pets_list, name='pets'),
    path('consultations', consultations.consultations_list, name='consultations'),
    path('labtests', labtests.flat_list, name='labtests'),
    path('treatments', treatments.flat_list, name='treatments'),
    path('prescriptions', prescriptions.flat_list, name='prescriptions'),

    # Staff
    path('admin/dashboard', admin_dashboard, name='admin-dashboard'),
    path('admin/clients', clients.clients_collection, name='admin-clients'),
    path('admin/clients/<int:client_id>', clients.client_detail, name='admin-client'),
    path('admin/clients/<int:client_id>/pets', pets.client_pets, name='admin-client-pets'),
    path(PET, pets.client_pet_detail, name='admin-client-pet'),
    path(PET + '/consultations', consultations.pet_consultations, name='admin-consultations'),
    path(CONSULTATION, consultations.consultation_detail, name='admin-consultation'),
    path(CONSULTATION + '/latest', consultations.consultation_latest, name='admin-consultation-latest'),
    path(CONSULTATION + '/labtests', labtests.collection, name='admin-labtests'),
    path(CONSULTATION + '/labtests/<int:pk>', labtests.detail, name='admin-labtest'),
    path(CONSULTATION + '/treatments', treatments.collection, name='admin-treatments'),
    path(CONSULTATION + '/treatments/<int:pk>', treatments.detail, name='admin-treatment'),
    path(CONSULTATION + '/prescriptions', prescriptions.collection, name='admin-prescriptions'),
    path(CONSULTATION + '/prescriptions/<int:pk>', prescriptions.detail, name='admin-prescription'),
    path(PET + '/vaccinations', vaccinations.collection, name='admin-vaccinations'),
    path(PET + '/vaccinations/<int:pk>', vaccinations.detail, name='admin-vaccination'),
    path(PET + '/dewormings', dewormings.collection, name='admin-dewormings'),
    path(PET + '/dewormings/<int:pk>', dewormings.detail, name='admin-deworming'),
    path('admin/appointments', appointments.appointments_collection, name='admin-appointments'),
    path('admin/appointments/<int:pk>', appointments.appointment_detail, name='admin-appointment'),
    path('admin/notifications/reminders', notifications.send_reminders, name='admin-send-reminders'),
    path('admin/notifications/clients-today', notifications.clients_today, name='admin-clients-today'),
]
