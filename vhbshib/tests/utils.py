LOCAL_SCOPE = 'uni-erlangen.de'


def entitlement(role, course_number, scope=LOCAL_SCOPE):
    return f'urn:mace:vhb.org:entitlement:lms:{role}:{scope}:{course_number}'


VHB_ACCESS = 'urn:mace:vhb.org:entitlement:vhb-access'
