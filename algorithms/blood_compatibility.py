"""
Blood Type Compatibility Helper
Determines which donor blood types can give to which recipient blood types
"""

BLOOD_TYPES = ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-']

# Recipient blood type -> donor blood types it can safely receive from
COMPATIBILITY = {
    'A+': ['A+', 'A-', 'O+', 'O-'],
    'A-': ['A-', 'O-'],
    'B+': ['B+', 'B-', 'O+', 'O-'],
    'B-': ['B-', 'O-'],
    'AB+': ['A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-'],  # Universal recipient
    'AB-': ['A-', 'B-', 'AB-', 'O-'],
    'O+': ['O+', 'O-'],
    'O-': ['O-'],
}


def get_compatible_donors(recipient_blood_type):
    """
    Get list of blood types that can donate to recipient

    'Any' and unrecognized types match every donor type.

    Args:
        recipient_blood_type: Recipient's blood type (e.g., 'A+')

    Returns:
        List of compatible donor blood types
    """
    return list(COMPATIBILITY.get(recipient_blood_type, BLOOD_TYPES))


def is_compatible(donor_blood_type, recipient_blood_type):
    """
    Check if donor blood type is compatible with recipient

    Args:
        donor_blood_type: Donor's blood type (e.g., 'O+')
        recipient_blood_type: Recipient's blood type (e.g., 'A+')

    Returns:
        Boolean: True if compatible, False otherwise
    """
    if donor_blood_type not in BLOOD_TYPES:
        return False

    return donor_blood_type in get_compatible_donors(recipient_blood_type)


def get_compatible_recipients(donor_blood_type):
    """
    Get list of blood types that can receive from donor

    Args:
        donor_blood_type: Donor's blood type

    Returns:
        List of compatible recipient blood types
    """
    return [
        recipient for recipient, donors in COMPATIBILITY.items()
        if donor_blood_type in donors
    ]
